"""Tests for DynamoDB table access utilities."""

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from src.utils import dynamodb as dynamodb_utils
from src.utils.dynamodb import (
    TableAccessor,
    batch_put,
    get_required_env,
    get_table,
    override_table,
    scan_all,
    tables,
)


class TestGetRequiredEnv:
    def test_present(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOME_TABLE", "value")

        assert get_required_env("SOME_TABLE") == "value"

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SOME_TABLE", raising=False)

        assert get_required_env("SOME_TABLE", "fallback") == "fallback"

    def test_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SOME_TABLE", raising=False)

        with pytest.raises(ValueError, match="Required environment variable 'SOME_TABLE' is not set"):
            get_required_env("SOME_TABLE")


class TestTableAccessor:
    """Tests for TableAccessor singleton."""

    def test_singleton(self) -> None:
        assert TableAccessor() is tables

    def test_reads_table_names_from_env(self, dynamodb_tables: Any) -> None:
        assert tables.developers.name == "PortfolioDevelopers-dev"
        assert tables.projects.name == "PortfolioProjects-dev"
        assert tables.recruiter_profiles.name == "PortfolioRecruiterProfiles-dev"
        assert tables.job_matching.name == "JobMatching-dev"
        assert tables.visitor_links.name == "PortfolioVisitorLinks-dev"

    def test_visitor_links_uses_visitor_region(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The visitor table may live in another region than the Lambda."""
        monkeypatch.setenv("VISITOR_TABLE_NAME", "PortfolioVisitorLinks-dev")
        monkeypatch.setenv("VISITOR_TABLE_REGION", "us-east-1")

        with patch.object(dynamodb_utils, "_get_dynamodb") as mock_get:
            tables.visitor_links

        mock_get.assert_called_once_with("us-east-1")

    def test_other_tables_use_default_region(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVELOPER_TABLE_NAME", "PortfolioDevelopers-dev")

        with patch.object(dynamodb_utils, "_get_dynamodb") as mock_get:
            tables.developers

        mock_get.assert_called_once_with(None)

    def test_missing_env_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MATCHING_TABLE_NAME", raising=False)

        with pytest.raises(ValueError, match="MATCHING_TABLE_NAME"):
            tables.job_matching

    def test_override(self) -> None:
        fake = MagicMock()
        override_table("projects", fake)

        assert tables.projects is fake


class TestGetTable:
    def test_by_name(self, dynamodb_tables: Any) -> None:
        assert get_table("JobMatching-dev", "us-east-1").table_status == "ACTIVE"


class TestScanAll:
    """Tests for scan_all pagination."""

    def test_follows_last_evaluated_key(self) -> None:
        table = MagicMock()
        table.scan.side_effect = [
            {"Items": [{"id": "1"}], "LastEvaluatedKey": {"id": "1"}},
            {"Items": [{"id": "2"}]},
        ]

        assert scan_all(table, Limit=1) == [{"id": "1"}, {"id": "2"}]
        table.scan.assert_called_with(ExclusiveStartKey={"id": "1"}, Limit=1)

    def test_real_table(self, projects_table: Any) -> None:
        for i in range(3):
            projects_table.put_item(Item={"id": f"p{i}", "developerId": "d"})

        assert len(scan_all(projects_table)) == 3


class TestWrites:
    """Tests for batch_put."""

    def test_batch_put(self, developers_table: Any) -> None:
        count = batch_put(developers_table, [{"id": "a"}, {"id": "b"}])

        assert count == 2
        assert len(scan_all(developers_table)) == 2
