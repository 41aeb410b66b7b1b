"""Lambda function definitions for the portfolio stack.

This module creates the Python Lambdas of the main stack:
- Job matching resolver (getJobMatching, getJobMatchingByLinkId)
- AI advocate resolver (getAdvocateGreeting, askAIQuestion, resetConversation)
- Visitor link generator (invoked by the admin API and scripts)
- Data loader (CloudFormation custom resource)
"""

import os
from typing import TYPE_CHECKING, Any

from aws_cdk import Duration
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from .helpers import EDGE_REGION

if TYPE_CHECKING:
    from aws_cdk import aws_cognito as cognito
    from aws_cdk import aws_dynamodb as dynamodb
    from aws_cdk import aws_s3 as s3

LAMBDA_CODE_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "src")


def get_lambda_code() -> lambda_.Code:
    """Package only the src directory (handlers/ and utils/ at the archive root)."""
    return lambda_.Code.from_asset(
        LAMBDA_CODE_PATH,
        exclude=[
            "__pycache__",
            "*.pyc",
            ".pytest_cache",
        ],
    )


def create_lambda_functions(
    scope: Construct,
    rn: Any,  # Resource naming function
    env_name: str,
    lambda_execution_role: iam.Role,
    tables: dict[str, "dynamodb.Table"],
    data_bucket: "s3.Bucket",
    user_pool: "cognito.UserPool",
    bedrock_model_id: str,
    site_domain: str,
) -> dict[str, lambda_.Function]:
    """Create all Lambda functions for the main stack.

    Args:
        scope: CDK construct scope
        rn: Resource naming function (name -> formatted name)
        env_name: Environment name (dev, prod)
        lambda_execution_role: IAM role for Lambda execution
        tables: Tables from create_dynamodb_tables
        data_bucket: Bucket holding {env}/developer.json and {env}/projects.json
        user_pool: Pool visitor users are created in
        bedrock_model_id: Validated Bedrock model id for the AI advocate
        site_domain: Domain used when building visitor links

    Returns:
        Dictionary containing all Lambda functions
    """
    common_env = {
        "ENVIRONMENT": env_name,
        "LOG_LEVEL": "INFO",
    }
    lambda_code = get_lambda_code()

    job_matching_fn = lambda_.Function(
        scope,
        "JobMatchingFn",
        function_name=rn("job-matching"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="handlers.job_matching.handler",
        code=lambda_code,
        timeout=Duration.seconds(10),
        memory_size=256,
        role=lambda_execution_role,
        environment={
            **common_env,
            "MATCHING_TABLE_NAME": tables["job_matching_table"].table_name,
            "ALLOWED_ORIGIN": f"https://{site_domain}",
        },
    )

    ai_advocate_fn = lambda_.Function(
        scope,
        "AIAdvocateFn",
        function_name=rn("ai-advocate"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="handlers.ai_advocate.handler",
        code=lambda_code,
        timeout=Duration.seconds(30),  # Bedrock round trip
        memory_size=512,
        role=lambda_execution_role,
        environment={
            **common_env,
            "DEVELOPER_TABLE_NAME": tables["developers_table"].table_name,
            "PROJECTS_TABLE_NAME": tables["projects_table"].table_name,
            "RECRUITER_PROFILES_TABLE_NAME": tables["recruiter_profiles_table"].table_name,
            "MATCHING_TABLE_NAME": tables["job_matching_table"].table_name,
            "BEDROCK_MODEL_ID": bedrock_model_id,
        },
    )

    link_generator_fn = lambda_.Function(
        scope,
        "LinkGeneratorFn",
        function_name=rn("link-generator"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="handlers.link_generator.handler",
        code=lambda_code,
        timeout=Duration.seconds(15),
        memory_size=256,
        role=lambda_execution_role,
        environment={
            **common_env,
            "USER_POOL_ID": user_pool.user_pool_id,
            "SITE_DOMAIN": site_domain,
            "VISITOR_TABLE_NAME": rn("PortfolioVisitorLinks"),
            "VISITOR_TABLE_REGION": EDGE_REGION,
            "RECRUITER_PROFILES_TABLE_NAME": tables["recruiter_profiles_table"].table_name,
        },
    )

    data_loader_fn = lambda_.Function(
        scope,
        "DataLoaderFn",
        function_name=rn("data-loader"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="handlers.data_loader.handler",
        code=lambda_code,
        timeout=Duration.minutes(5),
        memory_size=256,
        role=lambda_execution_role,
        environment={
            **common_env,
            "DATA_BUCKET_NAME": data_bucket.bucket_name,
            "DEVELOPER_TABLE_NAME": tables["developers_table"].table_name,
            "PROJECTS_TABLE_NAME": tables["projects_table"].table_name,
        },
    )

    return {
        "job_matching_fn": job_matching_fn,
        "ai_advocate_fn": ai_advocate_fn,
        "link_generator_fn": link_generator_fn,
        "data_loader_fn": data_loader_fn,
    }
