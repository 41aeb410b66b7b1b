"""Mutation resolvers for AppSync GraphQL API."""

from typing import Any

from aws_cdk import aws_appsync as appsync
from constructs import Construct

from ..resolver_builder import ResolverBuilder


def create_mutation_resolvers(
    scope: Construct,
    api: appsync.GraphqlApi,
    datasources: dict[str, Any],
    lambda_datasources: dict[str, appsync.LambdaDataSource],
) -> None:
    """
    Create all AppSync mutation resolvers.

    Developer and project mutations replace whole items (PutItem), matching
    how the admin console writes records.

    Args:
        scope: CDK construct scope
        api: AppSync GraphQL API
        datasources: Dictionary of DynamoDB data sources
        lambda_datasources: Dictionary of Lambda data sources
    """
    builder = ResolverBuilder(api, datasources, lambda_datasources, scope)

    builder.create_crud_resolver(
        field_name="updateDeveloper",
        type_name="Mutation",
        datasource_name="developers",
        operation="update",
    )

    builder.create_crud_resolver(
        field_name="createProject",
        type_name="Mutation",
        datasource_name="projects",
        operation="create",
    )
    builder.create_crud_resolver(
        field_name="updateProject",
        type_name="Mutation",
        datasource_name="projects",
        operation="update",
    )
    builder.create_crud_resolver(
        field_name="deleteProject",
        type_name="Mutation",
        datasource_name="projects",
        operation="delete",
    )

    builder.create_lambda_resolver(
        field_name="resetConversation",
        type_name="Mutation",
        lambda_datasource_name="ai_advocate",
    )
