"""
Test fixtures for Lambda function tests.

Provides common test data and mocked AWS resources.
"""

import json
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from src.utils import dynamodb as dynamodb_utils
from tests.unit.fixtures import make_appsync_event, make_developer, make_project, make_recruiter_profile
from tests.unit.table_schemas import TABLE_NAMES, create_all_tables

DATA_BUCKET = "portfolio-data-test"


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set fake AWS credentials and table names for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("ENVIRONMENT", "dev")
    monkeypatch.setenv("DEVELOPER_TABLE_NAME", TABLE_NAMES["developers"])
    monkeypatch.setenv("PROJECTS_TABLE_NAME", TABLE_NAMES["projects"])
    monkeypatch.setenv("RECRUITER_PROFILES_TABLE_NAME", TABLE_NAMES["recruiter_profiles"])
    monkeypatch.setenv("MATCHING_TABLE_NAME", TABLE_NAMES["job_matching"])
    monkeypatch.setenv("VISITOR_TABLE_NAME", TABLE_NAMES["visitor_links"])
    monkeypatch.setenv("VISITOR_TABLE_REGION", "us-east-1")
    monkeypatch.setenv("DATA_BUCKET_NAME", DATA_BUCKET)
    monkeypatch.setenv("BEDROCK_MODEL_ID", "anthropic.claude-3-haiku-20240307-v1:0")


@pytest.fixture(autouse=True)
def _reset_table_overrides() -> Generator[None, None, None]:
    yield
    dynamodb_utils.clear_all_overrides()


@pytest.fixture
def dynamodb_tables(aws_credentials: None) -> Generator[Dict[str, Any], None, None]:
    """Create all mock DynamoDB tables."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        yield create_all_tables(dynamodb)


@pytest.fixture
def developers_table(dynamodb_tables: Dict[str, Any]) -> Any:
    return dynamodb_tables["developers"]


@pytest.fixture
def projects_table(dynamodb_tables: Dict[str, Any]) -> Any:
    return dynamodb_tables["projects"]


@pytest.fixture
def recruiter_profiles_table(dynamodb_tables: Dict[str, Any]) -> Any:
    return dynamodb_tables["recruiter_profiles"]


@pytest.fixture
def job_matching_table(dynamodb_tables: Dict[str, Any]) -> Any:
    return dynamodb_tables["job_matching"]


@pytest.fixture
def visitor_links_table(dynamodb_tables: Dict[str, Any]) -> Any:
    return dynamodb_tables["visitor_links"]


@pytest.fixture
def s3_bucket(dynamodb_tables: Dict[str, Any]) -> Any:
    """Create the data bucket inside the same moto context as the tables."""
    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket=DATA_BUCKET)
    return s3


@pytest.fixture
def sample_developer() -> Dict[str, Any]:
    return make_developer()


@pytest.fixture
def sample_project() -> Dict[str, Any]:
    return make_project("project-1")


@pytest.fixture
def sample_recruiter() -> Dict[str, Any]:
    return make_recruiter_profile("link-123")


@pytest.fixture
def seeded_portfolio(
    developers_table: Any,
    projects_table: Any,
    sample_developer: Dict[str, Any],
    sample_project: Dict[str, Any],
) -> Dict[str, Any]:
    """Developer profile plus one project."""
    developers_table.put_item(Item=sample_developer)
    projects_table.put_item(Item=sample_project)
    return {"developer": sample_developer, "projects": [sample_project]}


@pytest.fixture
def lambda_context() -> Any:
    """Mock Lambda context object."""
    context = MagicMock()
    context.function_name = "visitor-context-dev"
    context.aws_request_id = "test-request-id"
    return context


@pytest.fixture
def appsync_event() -> Dict[str, Any]:
    """AppSync event for a signed-in visitor."""
    return make_appsync_event("getAdvocateGreeting", claims={"custom:linkId": "link-123", "sub": "sub-1"})


@pytest.fixture
def bedrock_client() -> MagicMock:
    """Bedrock runtime client returning a Claude-style response."""
    client = MagicMock()
    body = MagicMock()
    body.read.return_value = json.dumps({"content": [{"type": "text", "text": "Generated text"}]}).encode()
    client.invoke_model.return_value = {"body": body}
    return client

