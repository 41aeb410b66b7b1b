"""Field resolvers for AppSync GraphQL API."""

from typing import Any

from aws_cdk import aws_appsync as appsync
from constructs import Construct

from ..api import MAPPING_TEMPLATES_DIR
from ..resolver_builder import ResolverBuilder


def create_field_resolvers(
    scope: Construct,
    api: appsync.GraphqlApi,
    datasources: dict[str, Any],
    lambda_datasources: dict[str, appsync.LambdaDataSource],
) -> None:
    """
    Create field resolvers for the Developer <-> Project relationship.

    Args:
        scope: CDK construct scope
        api: AppSync GraphQL API
        datasources: Dictionary of DynamoDB data sources
        lambda_datasources: Dictionary of Lambda data sources
    """
    builder = ResolverBuilder(api, datasources, lambda_datasources, scope)

    # Developer.projects - Query byDeveloperId with the parent developer's id
    builder.create_vtl_resolver(
        field_name="projects",
        type_name="Developer",
        datasource_name="projects",
        request_template=MAPPING_TEMPLATES_DIR / "developer_projects_request.vtl",
        response_template=appsync.MappingTemplate.dynamo_db_result_list(),
        id_suffix="DeveloperProjectsResolver",
    )

    # Project.developer - GetItem keyed by the project's developerId
    builder.create_vtl_resolver(
        field_name="developer",
        type_name="Project",
        datasource_name="developers",
        request_template=appsync.MappingTemplate.dynamo_db_get_item("id", "developerId"),
        response_template=appsync.MappingTemplate.dynamo_db_result_item(),
        id_suffix="ProjectDeveloperResolver",
    )
