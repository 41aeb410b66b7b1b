"""
AppSync GraphQL API module for the portfolio.

This module orchestrates the creation of the AppSync GraphQL API:

- api.py: API creation (API key default, Cognito user pool additional)
- datasources.py: DynamoDB and Lambda data sources
- resolver_builder.py: VTL, CRUD and Lambda resolver helpers
- resolvers/: resolver wiring organized by type (queries, mutations, fields)
- mapping-templates/: VTL request templates
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aws_cdk import aws_appsync as appsync
from constructs import Construct

from .api import create_appsync_api
from .datasources import create_dynamodb_datasources, create_lambda_datasources
from .resolvers import create_resolvers

if TYPE_CHECKING:
    from aws_cdk import aws_cognito as cognito
    from aws_cdk import aws_dynamodb as dynamodb
    from aws_cdk import aws_lambda as lambda_


@dataclass
class AppSyncResources:
    """Container for all AppSync resources created by setup_appsync."""

    api: appsync.GraphqlApi
    dynamodb_datasources: dict[str, appsync.DynamoDbDataSource]
    lambda_datasources: dict[str, appsync.LambdaDataSource]


def setup_appsync(
    scope: Construct,
    env_name: str,
    resource_name: Any,  # Callable[[str], str]
    user_pool: "cognito.IUserPool",
    tables: dict[str, "dynamodb.ITable"],
    lambda_functions: dict[str, "lambda_.IFunction"],
) -> AppSyncResources:
    """
    Set up the complete AppSync GraphQL API infrastructure.

    Args:
        scope: CDK construct scope
        env_name: Environment name (dev, prod)
        resource_name: Function to generate resource names
        user_pool: Cognito User Pool for authenticated visitors
        tables: Tables from create_dynamodb_tables
        lambda_functions: Functions from create_lambda_functions

    Returns:
        AppSyncResources containing all created resources
    """
    api = create_appsync_api(
        scope=scope,
        env_name=env_name,
        resource_name=resource_name,
        user_pool=user_pool,
    )

    dynamodb_datasources = create_dynamodb_datasources(api, tables)
    lambda_datasources = create_lambda_datasources(api, lambda_functions)

    create_resolvers(
        scope=scope,
        api=api,
        datasources=dynamodb_datasources,
        lambda_datasources=lambda_datasources,
    )

    return AppSyncResources(
        api=api,
        dynamodb_datasources=dynamodb_datasources,
        lambda_datasources=lambda_datasources,
    )
