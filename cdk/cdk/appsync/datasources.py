"""AppSync data source creation."""

from typing import TYPE_CHECKING

from aws_cdk import aws_appsync as appsync
from aws_cdk import aws_iam as iam

if TYPE_CHECKING:
    from aws_cdk import aws_dynamodb as dynamodb
    from aws_cdk import aws_lambda as lambda_


def create_dynamodb_datasources(
    api: appsync.GraphqlApi,
    tables: dict[str, "dynamodb.ITable"],
) -> dict[str, appsync.DynamoDbDataSource]:
    """
    Create DynamoDB data sources for the AppSync API.

    Args:
        api: The AppSync GraphQL API
        tables: Tables from create_dynamodb_tables

    Returns:
        Dictionary of datasource name to DynamoDB data source
    """
    datasources: dict[str, appsync.DynamoDbDataSource] = {}

    table_configs = [
        ("developers", "developers_table", "DeveloperDataSource"),
        ("projects", "projects_table", "ProjectsDataSource"),
    ]

    for ds_key, table_key, ds_name in table_configs:
        if table_key in tables:
            table = tables[table_key]
            ds = api.add_dynamo_db_data_source(ds_name, table=table)
            # Grant GSI permissions (Developer.projects queries byDeveloperId)
            ds.grant_principal.add_to_principal_policy(
                iam.PolicyStatement(
                    actions=["dynamodb:Query", "dynamodb:Scan"],
                    resources=[f"{table.table_arn}/index/*"],
                )
            )
            datasources[ds_key] = ds

    return datasources


def create_lambda_datasources(
    api: appsync.GraphqlApi,
    lambda_functions: dict[str, "lambda_.IFunction"],
) -> dict[str, appsync.LambdaDataSource]:
    """
    Create Lambda data sources for the AppSync API.

    Args:
        api: The AppSync GraphQL API
        lambda_functions: Functions from create_lambda_functions

    Returns:
        Dictionary of datasource name to Lambda data source
    """
    datasources: dict[str, appsync.LambdaDataSource] = {}

    lambda_ds_configs = [
        ("job_matching", "job_matching_fn", "JobMatchingDS"),
        ("ai_advocate", "ai_advocate_fn", "AIAdvocateDS"),
    ]

    for ds_key, fn_key, ds_name in lambda_ds_configs:
        if fn_key in lambda_functions:
            datasources[ds_key] = api.add_lambda_data_source(ds_name, lambda_function=lambda_functions[fn_key])

    return datasources
