"""
Builder pattern for AppSync resolvers.

Simplifies creation of the two resolver types the portfolio API uses:
VTL resolvers on DynamoDB data sources and Lambda resolvers.
"""

from pathlib import Path
from typing import Any, Union

from aws_cdk import aws_appsync as appsync
from constructs import Construct

TemplateSource = Union[Path, appsync.MappingTemplate]


def as_mapping_template(template: TemplateSource) -> appsync.MappingTemplate:
    """Load a template file, or pass a built MappingTemplate through."""
    if isinstance(template, Path):
        return appsync.MappingTemplate.from_file(str(template))
    return template


def crud_templates(operation: str, pk: str = "id") -> tuple[appsync.MappingTemplate, appsync.MappingTemplate]:
    """Request/response templates for a single-key DynamoDB operation.

    Args:
        operation: One of "get", "list", "create", "update", "delete"
        pk: Partition key attribute, also the argument name for get/delete

    Returns:
        (request_template, response_template)
    """
    if operation == "get":
        return appsync.MappingTemplate.dynamo_db_get_item(pk, pk), appsync.MappingTemplate.dynamo_db_result_item()
    if operation == "list":
        return appsync.MappingTemplate.dynamo_db_scan_table(), appsync.MappingTemplate.dynamo_db_result_list()
    if operation == "create":
        request = appsync.MappingTemplate.dynamo_db_put_item(
            appsync.PrimaryKey.partition(pk).auto(), appsync.Values.projecting("input")
        )
        return request, appsync.MappingTemplate.dynamo_db_result_item()
    if operation == "update":
        # Whole-item replace keyed by input.{pk}
        request = appsync.MappingTemplate.dynamo_db_put_item(
            appsync.PrimaryKey.partition(pk).is_(f"input.{pk}"), appsync.Values.projecting("input")
        )
        return request, appsync.MappingTemplate.dynamo_db_result_item()
    if operation == "delete":
        return appsync.MappingTemplate.dynamo_db_delete_item(pk, pk), appsync.MappingTemplate.dynamo_db_result_item()
    raise ValueError(f"Unsupported operation: {operation}")


class ResolverBuilder:
    """
    Fluent builder for AppSync resolvers.

    Example:
        builder = ResolverBuilder(api, datasources, lambda_datasources, scope)

        # VTL resolver from a template file
        builder.create_vtl_resolver(
            field_name="getDeveloper",
            type_name="Query",
            datasource_name="developers",
            request_template=MAPPING_TEMPLATES_DIR / "get_developer_request.vtl",
            response_template=appsync.MappingTemplate.dynamo_db_result_item(),
        )

        # Lambda resolver
        builder.create_lambda_resolver(
            field_name="askAIQuestion",
            type_name="Query",
            lambda_datasource_name="ai_advocate",
        )
    """

    def __init__(
        self,
        api: appsync.GraphqlApi,
        datasources: dict[str, Any],
        lambda_datasources: dict[str, appsync.LambdaDataSource],
        scope: Construct,
    ):
        """
        Initialize the resolver builder.

        Args:
            api: AppSync GraphQL API
            datasources: Dictionary of AppSync data sources (keyed by name)
            lambda_datasources: Dictionary of Lambda data sources (keyed by name)
            scope: CDK construct scope for creating resources
        """
        self.api = api
        self.datasources = datasources
        self.lambda_datasources = lambda_datasources
        self.scope = scope

    def create_vtl_resolver(
        self,
        field_name: str,
        type_name: str,
        datasource_name: str,
        request_template: TemplateSource,
        response_template: TemplateSource,
        id_suffix: str | None = None,
    ) -> appsync.Resolver:
        """
        Create a VTL resolver with request/response mapping templates.

        Args:
            field_name: GraphQL field name (e.g., "getDeveloper")
            type_name: GraphQL type name (e.g., "Query", "Mutation", "Developer")
            datasource_name: Key in datasources dict (e.g., "developers")
            request_template: Template file or built MappingTemplate
            response_template: Template file or built MappingTemplate
            id_suffix: Optional custom CDK construct ID suffix

        Returns:
            The created resolver
        """
        resolver_id = id_suffix or f"{type_name}{field_name[0].upper()}{field_name[1:]}Resolver"

        datasource = self.datasources[datasource_name]
        resolver: appsync.Resolver = datasource.create_resolver(
            resolver_id,
            type_name=type_name,
            field_name=field_name,
            request_mapping_template=as_mapping_template(request_template),
            response_mapping_template=as_mapping_template(response_template),
        )
        return resolver

    def create_crud_resolver(
        self,
        field_name: str,
        type_name: str,
        datasource_name: str,
        operation: str,
        pk: str = "id",
        id_suffix: str | None = None,
    ) -> appsync.Resolver:
        """Create a VTL resolver for a standard get/list/create/update/delete operation."""
        request_template, response_template = crud_templates(operation, pk)
        return self.create_vtl_resolver(
            field_name=field_name,
            type_name=type_name,
            datasource_name=datasource_name,
            request_template=request_template,
            response_template=response_template,
            id_suffix=id_suffix,
        )

    def create_lambda_resolver(
        self,
        field_name: str,
        type_name: str,
        lambda_datasource_name: str,
        id_suffix: str | None = None,
    ) -> appsync.Resolver:
        """
        Create a Lambda resolver.

        The Lambda receives the full AppSync event (arguments, identity, info).

        Args:
            field_name: GraphQL field name
            type_name: GraphQL type name
            lambda_datasource_name: Key in lambda_datasources dict
            id_suffix: Optional custom CDK construct ID suffix

        Returns:
            The created resolver
        """
        resolver_id = id_suffix or f"{type_name}{field_name[0].upper()}{field_name[1:]}Resolver"

        lambda_ds = self.lambda_datasources[lambda_datasource_name]
        return lambda_ds.create_resolver(
            resolver_id,
            type_name=type_name,
            field_name=field_name,
        )

    def create_batch_resolvers(
        self,
        resolvers: list[dict[str, Any]],
    ) -> list[appsync.Resolver]:
        """
        Create multiple resolvers from a configuration list.

        Args:
            resolvers: List of resolver configurations, each containing:
                - type: "vtl", "crud" or "lambda"
                - field_name: GraphQL field name
                - type_name: GraphQL type name
                - datasource_name: (for vtl) Key in datasources dict
                - request_template / response_template: (for vtl)
                - operation: (for crud) get, list, create, update or delete
                - lambda_datasource_name: (for lambda) Key in lambda_datasources dict
                - id_suffix: (optional) Custom CDK construct ID

        Returns:
            List of created resolvers
        """
        created = []
        for config in resolvers:
            resolver_type = config["type"]

            if resolver_type == "vtl":
                resolver = self.create_vtl_resolver(
                    field_name=config["field_name"],
                    type_name=config["type_name"],
                    datasource_name=config["datasource_name"],
                    request_template=config["request_template"],
                    response_template=config["response_template"],
                    id_suffix=config.get("id_suffix"),
                )
            elif resolver_type == "crud":
                resolver = self.create_crud_resolver(
                    field_name=config["field_name"],
                    type_name=config["type_name"],
                    datasource_name=config["datasource_name"],
                    operation=config["operation"],
                    id_suffix=config.get("id_suffix"),
                )
            elif resolver_type == "lambda":
                resolver = self.create_lambda_resolver(
                    field_name=config["field_name"],
                    type_name=config["type_name"],
                    lambda_datasource_name=config["lambda_datasource_name"],
                    id_suffix=config.get("id_suffix"),
                )
            else:
                raise ValueError(f"Unknown resolver type: {resolver_type}")

            created.append(resolver)

        return created
