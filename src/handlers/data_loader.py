"""
CloudFormation custom resource that loads portfolio data into DynamoDB.

Reads `{environment}/developer.json` and `{environment}/projects.json` from
the data bucket, validates them and batch-writes both tables. Errors are
raised so CloudFormation reports the deployment as failed.
"""

import json
import os
from decimal import Decimal
from typing import Any, Dict, List

import boto3

# Handle both Lambda (absolute) and unit test (relative) imports
try:  # pragma: no cover
    from utils.dynamodb import batch_put, get_required_env, tables  # type: ignore[import-not-found]
    from utils.errors import AppError, ErrorCode  # type: ignore[import-not-found]
    from utils.logging import get_logger  # type: ignore[import-not-found]
    from utils.validation import validate_portfolio_data  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover
    from ..utils.dynamodb import batch_put, get_required_env, tables
    from ..utils.errors import AppError, ErrorCode
    from ..utils.logging import get_logger
    from ..utils.validation import validate_portfolio_data

logger = get_logger(__name__)

ENVIRONMENTS = ("dev", "prod")


def get_json_from_s3(bucket: str, key: str) -> List[Dict[str, Any]]:
    """Read a JSON array from S3; floats become Decimal for DynamoDB."""
    s3 = boto3.client("s3")
    body = s3.get_object(Bucket=bucket, Key=key)["Body"].read()
    data: List[Dict[str, Any]] = json.loads(body, parse_float=Decimal)
    return data


def resolve_environment(event: Dict[str, Any]) -> str:
    environment = (event.get("ResourceProperties") or {}).get("environment") or os.getenv("ENVIRONMENT") or "dev"
    if environment not in ENVIRONMENTS:
        raise AppError(ErrorCode.INVALID_INPUT, 'Environment must be either "dev" or "prod"')
    return str(environment)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Custom resource handler.

    Returns:
        {PhysicalResourceId, Data: {Message, DevelopersCount, ProjectsCount}}

    Raises:
        AppError: On invalid environment or invalid data
        ValueError: If a required environment variable is missing
    """
    environment = resolve_environment(event)
    physical_id = f"DataLoader-{environment}"

    if event.get("RequestType") == "Delete":
        logger.info("Delete request, nothing to do", environment=environment)
        return {"PhysicalResourceId": physical_id}

    bucket = get_required_env("DATA_BUCKET_NAME")
    get_required_env("DEVELOPER_TABLE_NAME")
    get_required_env("PROJECTS_TABLE_NAME")

    logger.info("Loading portfolio data", environment=environment, bucket=bucket)
    try:
        developers = get_json_from_s3(bucket, f"{environment}/developer.json")
        projects = get_json_from_s3(bucket, f"{environment}/projects.json")

        validate_portfolio_data(developers, projects)

        developers_count = batch_put(tables.developers, developers)
        projects_count = batch_put(tables.projects, projects)
    except Exception as e:
        logger.error("Data load failed", environment=environment, error=str(e), exc_info=True)
        raise

    logger.info(
        "Portfolio data loaded",
        environment=environment,
        developers=developers_count,
        projects=projects_count,
    )
    return {
        "PhysicalResourceId": physical_id,
        "Data": {
            "Message": f"Successfully loaded data for {environment} environment",
            "DevelopersCount": developers_count,
            "ProjectsCount": projects_count,
        },
    }
