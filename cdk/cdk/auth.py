"""Cognito User Pool authentication configuration for the portfolio stack.

This module creates and configures:
- Cognito User Pool with email sign-in and no self sign-up
- `custom:linkId` attribute tying a visitor user to its visitor link
- User Pool Client used by the edge function (ADMIN_USER_PASSWORD_AUTH)
"""

from typing import Any

from aws_cdk import CfnOutput, Duration, RemovalPolicy
from aws_cdk import aws_cognito as cognito
from constructs import Construct

TOKEN_VALIDITY = Duration.minutes(60)


def _create_password_policy() -> cognito.PasswordPolicy:
    """Create password policy for user pool."""
    return cognito.PasswordPolicy(
        min_length=8, require_lowercase=True, require_uppercase=True, require_digits=True, require_symbols=True
    )


def create_cognito_auth(
    scope: Construct,
    rn: Any,  # Resource naming function
    is_prod: bool = False,
) -> dict[str, Any]:
    """Create Cognito User Pool and client for visitor authentication.

    Visitor users are created by the link generator, never by sign-up.

    Args:
        scope: CDK construct scope
        rn: Resource naming function (name -> formatted name)
        is_prod: Retain the pool on stack deletion

    Returns:
        Dictionary containing user_pool and user_pool_client
    """
    user_pool = cognito.UserPool(
        scope,
        "UserPool",
        user_pool_name=rn("portfolio-user-pool"),
        self_sign_up_enabled=False,
        sign_in_aliases=cognito.SignInAliases(email=True, username=False),
        standard_attributes=cognito.StandardAttributes(
            email=cognito.StandardAttribute(required=True, mutable=True),
        ),
        custom_attributes={
            "linkId": cognito.StringAttribute(min_len=1, max_len=64, mutable=True),
        },
        password_policy=_create_password_policy(),
        account_recovery=cognito.AccountRecovery.EMAIL_ONLY,
        removal_policy=RemovalPolicy.RETAIN if is_prod else RemovalPolicy.DESTROY,
    )

    user_pool_client = user_pool.add_client(
        "PortfolioClient",
        user_pool_client_name=rn("portfolio-web"),
        auth_flows=cognito.AuthFlow(admin_user_password=True, user_srp=True),
        access_token_validity=TOKEN_VALIDITY,
        id_token_validity=TOKEN_VALIDITY,
        refresh_token_validity=Duration.days(1),
        prevent_user_existence_errors=True,
        generate_secret=False,
    )

    CfnOutput(scope, "UserPoolId", value=user_pool.user_pool_id, description="Cognito User Pool ID")
    CfnOutput(scope, "UserPoolClientId", value=user_pool_client.user_pool_client_id, description="Cognito client ID")

    return {
        "user_pool": user_pool,
        "user_pool_client": user_pool_client,
    }
