"""
Centralized DynamoDB table access utilities.

Provides singleton-pattern table accessors with lazy initialization
and test monkeypatch support.
"""

import os
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import boto3

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBServiceResource
    from mypy_boto3_dynamodb.service_resource import Table


# Module-level cache for test overrides
_table_overrides: dict[str, Optional["Table"]] = {}


def get_required_env(name: str, default: Optional[str] = None) -> str:
    """Get a required environment variable.

    Args:
        name: Environment variable name
        default: Optional default for test environments

    Returns:
        The environment variable value

    Raises:
        ValueError: If the env var is not set and no default is provided
    """
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Required environment variable '{name}' is not set")
    return value


def _get_dynamodb(region_name: Optional[str] = None) -> "DynamoDBServiceResource":
    """Get DynamoDB resource with optional endpoint override for local testing."""
    return boto3.resource(
        "dynamodb",
        region_name=region_name,
        endpoint_url=os.getenv("DYNAMODB_ENDPOINT"),
    )


def get_table(table_name: str, region_name: Optional[str] = None) -> "Table":
    """Get a table by its physical name (used when the name comes from SSM)."""
    return _get_dynamodb(region_name).Table(table_name)


class TableAccessor:
    """Centralized access to DynamoDB tables with environment-based naming."""

    _instance: Optional["TableAccessor"] = None

    def __new__(cls) -> "TableAccessor":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _table(self, key: str, env_name: str, region_name: Optional[str] = None) -> "Table":
        if override := _table_overrides.get(key):
            return override
        table_name = get_required_env(env_name)
        return _get_dynamodb(region_name).Table(table_name)

    @property
    def developers(self) -> "Table":
        """Get developers table instance."""
        return self._table("developers", "DEVELOPER_TABLE_NAME")

    @property
    def projects(self) -> "Table":
        """Get projects table instance."""
        return self._table("projects", "PROJECTS_TABLE_NAME")

    @property
    def recruiter_profiles(self) -> "Table":
        """Get recruiter profiles table instance."""
        return self._table("recruiter_profiles", "RECRUITER_PROFILES_TABLE_NAME")

    @property
    def job_matching(self) -> "Table":
        """Get job matching table instance."""
        return self._table("job_matching", "MATCHING_TABLE_NAME")

    @property
    def visitor_links(self) -> "Table":
        """Get visitor links table instance.

        The table lives next to the edge function, so VISITOR_TABLE_REGION may
        point outside the Lambda's own region.
        """
        return self._table("visitor_links", "VISITOR_TABLE_NAME", os.getenv("VISITOR_TABLE_REGION"))


# Singleton instance for import
tables = TableAccessor()


def scan_all(table: "Table", **kwargs: Any) -> List[Dict[str, Any]]:
    """Scan a table following pagination."""
    response = table.scan(**kwargs)
    items: List[Dict[str, Any]] = list(response.get("Items", []))
    while "LastEvaluatedKey" in response:
        response = table.scan(ExclusiveStartKey=response["LastEvaluatedKey"], **kwargs)
        items.extend(response.get("Items", []))
    return items


def batch_put(table: "Table", items: Iterable[Dict[str, Any]]) -> int:
    """Write items with the table batch writer. Returns the number written."""
    count = 0
    with table.batch_writer() as batch:
        for item in items:
            batch.put_item(Item=item)
            count += 1
    return count


# Test utilities
def override_table(table_name: str, table: Optional["Table"]) -> None:
    """Override a table for testing. Set to None to clear override."""
    _table_overrides[table_name] = table


def clear_all_overrides() -> None:
    """Clear all table overrides (call in test teardown)."""
    _table_overrides.clear()
