"""Query resolvers for AppSync GraphQL API."""

from typing import Any

from aws_cdk import aws_appsync as appsync
from constructs import Construct

from ..api import MAPPING_TEMPLATES_DIR
from ..resolver_builder import ResolverBuilder


def create_query_resolvers(
    scope: Construct,
    api: appsync.GraphqlApi,
    datasources: dict[str, Any],
    lambda_datasources: dict[str, appsync.LambdaDataSource],
) -> None:
    """
    Create all AppSync query resolvers.

    Args:
        scope: CDK construct scope
        api: AppSync GraphQL API
        datasources: Dictionary of DynamoDB data sources
        lambda_datasources: Dictionary of Lambda data sources
    """
    builder = ResolverBuilder(api, datasources, lambda_datasources, scope)

    # === DEVELOPER & PROJECT QUERIES ===

    # getDeveloper ignores its id argument and reads the fixed profile key
    builder.create_vtl_resolver(
        field_name="getDeveloper",
        type_name="Query",
        datasource_name="developers",
        request_template=MAPPING_TEMPLATES_DIR / "get_developer_request.vtl",
        response_template=appsync.MappingTemplate.dynamo_db_result_item(),
        id_suffix="GetDeveloperResolver",
    )

    for field_name, datasource_name, operation in (
        ("listDevelopers", "developers", "list"),
        ("getProject", "projects", "get"),
        ("listProjects", "projects", "list"),
    ):
        builder.create_crud_resolver(
            field_name=field_name,
            type_name="Query",
            datasource_name=datasource_name,
            operation=operation,
        )

    # === VISITOR QUERIES (Lambda) ===

    builder.create_batch_resolvers(
        [
            {
                "type": "lambda",
                "field_name": field_name,
                "type_name": "Query",
                "lambda_datasource_name": lambda_datasource_name,
            }
            for field_name, lambda_datasource_name in (
                ("getAdvocateGreeting", "ai_advocate"),
                ("askAIQuestion", "ai_advocate"),
                ("getJobMatching", "job_matching"),
                ("getJobMatchingByLinkId", "job_matching"),
            )
        ]
    )
