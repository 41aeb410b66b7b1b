"""Lambda@Edge visitor-context function.

The function sits on viewer-request and viewer-response of the site
distribution. Lambda@Edge takes no environment variables; the handler reads
its stage from the function name suffix and everything else from SSM.
"""

from typing import Any

from aws_cdk import Duration
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_logs as logs
from constructs import Construct

from .lambdas import get_lambda_code


def create_edge_function(
    scope: Construct,
    rn: Any,  # Resource naming function
    env_name: str,
    edge_role: iam.Role,
) -> dict[str, Any]:
    """Create the visitor-context edge function.

    Args:
        scope: CDK construct scope (the edge stack)
        rn: Resource naming function; the name must end in -{env}
        env_name: Environment name (dev, prod)
        edge_role: Role from create_edge_function_role

    Returns:
        Dictionary containing the edge function
    """
    visitor_context_fn = cloudfront.experimental.EdgeFunction(
        scope,
        "VisitorContextFunction",
        function_name=rn("visitor-context"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="handlers.visitor_context.handler",
        code=get_lambda_code(),
        role=edge_role,
        # Viewer triggers are capped at 5 seconds and 128 MB
        timeout=Duration.seconds(5),
        memory_size=128,
        description=f"Adds visitor context cookies for {env_name}",
        log_retention=logs.RetentionDays.ONE_WEEK,
    )

    return {"visitor_context_fn": visitor_context_fn}
