"""AppSync API creation."""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from aws_cdk import Duration, Expiration, RemovalPolicy
from aws_cdk import aws_appsync as appsync
from constructs import Construct

if TYPE_CHECKING:
    from aws_cdk import aws_cognito as cognito


# VTL request templates live under the appsync/ folder
MAPPING_TEMPLATES_DIR = Path(__file__).parent / "mapping-templates"
SCHEMA_PATH = Path(__file__).resolve().parent.parent.parent.parent / "schema" / "schema.graphql"

API_KEY_VALIDITY_DAYS = 365


def create_appsync_api(
    scope: Construct,
    env_name: str,
    resource_name: Any,  # Callable[[str], str]
    user_pool: "cognito.IUserPool",
) -> appsync.GraphqlApi:
    """
    Create the AppSync GraphQL API with authorization.

    Public portfolio queries use the API key (default mode); visitor-only
    fields (askAIQuestion, resetConversation, mutations) require a user pool
    token, as declared by the schema directives.

    Args:
        scope: CDK construct scope
        env_name: Environment name (dev, prod)
        resource_name: Function to generate resource names
        user_pool: Cognito User Pool for authenticated visitors

    Returns:
        The created GraphQL API
    """
    enable_appsync_logging = os.getenv("ENABLE_APPSYNC_LOGGING", "false").lower() == "true"

    api_name = resource_name("portfolio-api")
    print(f"Creating AppSync API: {api_name}")

    api = appsync.GraphqlApi(
        scope,
        "PortfolioApi",
        name=api_name,
        definition=appsync.Definition.from_schema(appsync.SchemaFile.from_asset(str(SCHEMA_PATH))),
        authorization_config=appsync.AuthorizationConfig(
            default_authorization=appsync.AuthorizationMode(
                authorization_type=appsync.AuthorizationType.API_KEY,
                api_key_config=appsync.ApiKeyConfig(
                    name=resource_name("portfolio-public"),
                    expires=Expiration.after(Duration.days(API_KEY_VALIDITY_DAYS)),
                ),
            ),
            additional_authorization_modes=[
                appsync.AuthorizationMode(
                    authorization_type=appsync.AuthorizationType.USER_POOL,
                    user_pool_config=appsync.UserPoolConfig(user_pool=user_pool),
                ),
            ],
        ),
        xray_enabled=False,
        log_config=(
            appsync.LogConfig(
                field_log_level=appsync.FieldLogLevel.ALL,
                exclude_verbose_content=False,
            )
            if enable_appsync_logging
            else None
        ),
    )
    if env_name == "prod":
        api.apply_removal_policy(RemovalPolicy.RETAIN)

    return api
