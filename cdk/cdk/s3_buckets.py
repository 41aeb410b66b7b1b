"""
S3 Bucket creation for the portfolio stacks.

Creates:
- Site bucket for the statically exported frontend (edge stack)
- Data bucket holding data/{env}/*.json for the data loader (main stack)
"""

from pathlib import Path
from typing import Callable

from aws_cdk import RemovalPolicy, Stack
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3deploy
from constructs import Construct

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


def _unique_bucket_name(stack: Construct, rn: Callable[[str], str], name: str) -> str:
    # Bucket names are global; suffix with account and region
    scope = Stack.of(stack)
    return f"{rn(name)}-{scope.account}-{scope.region}"


def create_site_bucket(stack: Construct, rn: Callable[[str], str], is_prod: bool = False) -> s3.Bucket:
    """Create the private bucket CloudFront serves the site from."""
    return s3.Bucket(
        stack,
        "SiteBucket",
        bucket_name=_unique_bucket_name(stack, rn, "portfolio-web"),
        encryption=s3.BucketEncryption.S3_MANAGED,
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        enforce_ssl=True,
        removal_policy=RemovalPolicy.RETAIN if is_prod else RemovalPolicy.DESTROY,
        auto_delete_objects=not is_prod,
    )


def create_data_bucket(
    stack: Construct,
    rn: Callable[[str], str],
    env_name: str,
    is_prod: bool = False,
) -> dict[str, s3.Bucket | s3deploy.BucketDeployment]:
    """Create the data bucket and seed it with this environment's data files.

    Args:
        stack: CDK Construct (usually the Stack instance)
        rn: helper function to create resource names (rn(name: str) -> str)
        env_name: Environment whose data/{env} directory is deployed
        is_prod: Retain the bucket on stack deletion

    Returns:
        Dict with 'data_bucket' and 'data_deployment'
    """
    data_bucket = s3.Bucket(
        stack,
        "DataBucket",
        bucket_name=_unique_bucket_name(stack, rn, "portfolio-data"),
        versioned=True,
        encryption=s3.BucketEncryption.S3_MANAGED,
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        enforce_ssl=True,
        removal_policy=RemovalPolicy.RETAIN if is_prod else RemovalPolicy.DESTROY,
        auto_delete_objects=not is_prod,
    )

    # Objects land at {env}/developer.json and {env}/projects.json
    data_deployment = s3deploy.BucketDeployment(
        stack,
        "DataDeployment",
        sources=[s3deploy.Source.asset(str(DATA_DIR / env_name))],
        destination_bucket=data_bucket,
        destination_key_prefix=f"{env_name}/",
        prune=False,
    )

    return {
        "data_bucket": data_bucket,
        "data_deployment": data_deployment,
    }
