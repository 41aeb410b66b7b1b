"""
IAM roles and policies for the portfolio stacks.

Creates:
- Lambda execution role shared by the resolver and support Lambdas
- Edge function role (Lambda@Edge) for the visitor-context function
"""

from typing import Callable, Dict

from aws_cdk import Stack
from aws_cdk import aws_cognito as cognito
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from constructs import Construct

from .helpers import EDGE_REGION, MAIN_REGION


def create_lambda_execution_role(
    stack: Construct,
    rn: Callable[[str], str],
    tables: Dict[str, dynamodb.ITable],
    data_bucket: s3.IBucket,
    user_pool: cognito.IUserPool,
) -> iam.Role:
    """Create the Lambda execution role with appropriate permissions.

    Args:
        stack: CDK Construct (usually the Stack instance)
        rn: helper function to create resource names
        tables: Dict of DynamoDB tables to grant access to
        data_bucket: Bucket holding the portfolio data files
        user_pool: Pool the link generator creates visitor users in

    Returns:
        The Lambda execution role
    """
    account = Stack.of(stack).account

    lambda_execution_role = iam.Role(
        stack,
        "LambdaExecutionRole",
        role_name=rn("portfolio-lambda-exec"),
        assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
        managed_policies=[iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole")],
    )

    for table in tables.values():
        table.grant_read_write_data(lambda_execution_role)

        # Grant access to GSI indexes
        lambda_execution_role.add_to_policy(
            iam.PolicyStatement(
                actions=["dynamodb:Query", "dynamodb:Scan"],
                resources=[f"{table.table_arn}/index/*"],
            )
        )

    # Visitor links live in the edge region, outside this stack
    lambda_execution_role.add_to_policy(
        iam.PolicyStatement(
            actions=["dynamodb:GetItem", "dynamodb:PutItem", "dynamodb:DeleteItem"],
            resources=[f"arn:aws:dynamodb:{EDGE_REGION}:{account}:table/{rn('PortfolioVisitorLinks')}"],
        )
    )

    data_bucket.grant_read(lambda_execution_role)

    lambda_execution_role.add_to_policy(
        iam.PolicyStatement(
            actions=["bedrock:InvokeModel"],
            resources=["arn:aws:bedrock:*::foundation-model/*"],
        )
    )

    lambda_execution_role.add_to_policy(
        iam.PolicyStatement(
            actions=[
                "cognito-idp:AdminCreateUser",
                "cognito-idp:AdminSetUserPassword",
                "cognito-idp:AdminDeleteUser",
            ],
            resources=[user_pool.user_pool_arn],
        )
    )

    return lambda_execution_role


def create_edge_function_role(stack: Construct, rn: Callable[[str], str], env_name: str) -> iam.Role:
    """Create the role assumed by the visitor-context edge function.

    Lambda@Edge replicas run in many regions, so every resource is addressed by
    ARN pattern rather than by construct reference.

    Args:
        stack: CDK Construct (the edge stack, deployed in us-east-1)
        rn: helper function to create resource names
        env_name: Environment whose /portfolio/{env}/* parameters may be read

    Returns:
        The edge function role
    """
    account = Stack.of(stack).account

    edge_role = iam.Role(
        stack,
        "VisitorContextFunctionRole",
        role_name=rn("portfolio-visitor-context"),
        assumed_by=iam.CompositePrincipal(
            iam.ServicePrincipal("lambda.amazonaws.com"),
            iam.ServicePrincipal("edgelambda.amazonaws.com"),
        ),
        managed_policies=[iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole")],
    )

    edge_role.add_to_policy(
        iam.PolicyStatement(
            actions=["ssm:GetParameter", "ssm:GetParameters"],
            resources=[
                f"arn:aws:ssm:{EDGE_REGION}:{account}:parameter/portfolio/{env_name}/*",
                f"arn:aws:ssm:{MAIN_REGION}:{account}:parameter/portfolio/{env_name}/*",
            ],
        )
    )

    edge_role.add_to_policy(
        iam.PolicyStatement(
            actions=["cognito-idp:AdminInitiateAuth", "cognito-idp:AdminGetUser"],
            resources=[f"arn:aws:cognito-idp:{MAIN_REGION}:{account}:userpool/*"],
        )
    )

    edge_role.add_to_policy(
        iam.PolicyStatement(
            actions=["dynamodb:GetItem"],
            resources=[f"arn:aws:dynamodb:{EDGE_REGION}:{account}:table/{rn('PortfolioVisitorLinks')}"],
        )
    )

    # Replicas write logs in whichever region served the request
    edge_role.add_to_policy(
        iam.PolicyStatement(
            actions=["logs:CreateLogGroup", "logs:CreateLogStream", "logs:PutLogEvents"],
            resources=["arn:aws:logs:*:*:*"],
        )
    )

    return edge_role
