"""Tests for ResolverBuilder class."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cdk.appsync.resolver_builder import ResolverBuilder, as_mapping_template, crud_templates


@pytest.fixture
def mock_api():
    """Create a mock AppSync GraphQL API."""
    return MagicMock()


@pytest.fixture
def mock_datasources():
    """Create mock datasources dict."""
    datasources = {}
    for name in ["developers", "projects"]:
        ds = MagicMock()
        ds.create_resolver.return_value = MagicMock(name=f"{name}_resolver")
        datasources[name] = ds
    return datasources


@pytest.fixture
def mock_lambda_datasources():
    """Create mock Lambda datasources dict."""
    lambda_ds = {}
    for name in ["ai_advocate", "job_matching"]:
        ds = MagicMock()
        ds.create_resolver.return_value = MagicMock(name=f"{name}_resolver")
        lambda_ds[name] = ds
    return lambda_ds


@pytest.fixture
def builder(mock_api, mock_datasources, mock_lambda_datasources):
    """Create a ResolverBuilder instance."""
    return ResolverBuilder(
        api=mock_api,
        datasources=mock_datasources,
        lambda_datasources=mock_lambda_datasources,
        scope=MagicMock(),
    )


class TestAsMappingTemplate:
    """Tests for as_mapping_template helper."""

    def test_path_is_loaded_from_file(self):
        with patch("cdk.appsync.resolver_builder.appsync") as mock_appsync:
            mock_appsync.MappingTemplate.from_file.side_effect = lambda x: f"template:{x}"

            assert as_mapping_template(Path("/path/to/request.vtl")) == "template:/path/to/request.vtl"

    def test_built_template_passes_through(self):
        template = MagicMock()
        assert as_mapping_template(template) is template


class TestCrudTemplates:
    """Tests for crud_templates helper."""

    @pytest.mark.parametrize("operation", ["get", "list", "create", "update", "delete"])
    def test_supported_operations(self, operation):
        request, response = crud_templates(operation)

        assert request is not None
        assert response is not None

    def test_get_uses_partition_key(self):
        with patch("cdk.appsync.resolver_builder.appsync") as mock_appsync:
            crud_templates("get", pk="linkId")

        mock_appsync.MappingTemplate.dynamo_db_get_item.assert_called_once_with("linkId", "linkId")

    def test_update_keys_on_input(self):
        """Updates replace the item addressed by input.id."""
        with patch("cdk.appsync.resolver_builder.appsync") as mock_appsync:
            crud_templates("update")

        mock_appsync.PrimaryKey.partition.return_value.is_.assert_called_once_with("input.id")
        mock_appsync.Values.projecting.assert_called_once_with("input")

    def test_unsupported_operation(self):
        with pytest.raises(ValueError, match="Unsupported operation: scan"):
            crud_templates("scan")


class TestCreateVtlResolver:
    """Tests for VTL resolver creation."""

    def test_calls_datasource_create_resolver(self, builder):
        with patch("cdk.appsync.resolver_builder.appsync") as mock_appsync:
            mock_appsync.MappingTemplate.from_file.side_effect = lambda x: f"template:{x}"

            builder.create_vtl_resolver(
                field_name="getDeveloper",
                type_name="Query",
                datasource_name="developers",
                request_template=Path("/path/to/request.vtl"),
                response_template=Path("/path/to/response.vtl"),
            )

        call_args = builder.datasources["developers"].create_resolver.call_args
        assert call_args[0][0] == "QueryGetDeveloperResolver"
        assert call_args[1]["type_name"] == "Query"
        assert call_args[1]["field_name"] == "getDeveloper"
        assert call_args[1]["request_mapping_template"] == "template:/path/to/request.vtl"

    def test_custom_id_suffix(self, builder):
        with patch("cdk.appsync.resolver_builder.appsync"):
            builder.create_vtl_resolver(
                field_name="projects",
                type_name="Developer",
                datasource_name="projects",
                request_template=MagicMock(),
                response_template=MagicMock(),
                id_suffix="DeveloperProjectsResolver",
            )

        call_args = builder.datasources["projects"].create_resolver.call_args
        assert call_args[0][0] == "DeveloperProjectsResolver"

    def test_unknown_datasource(self, builder):
        with pytest.raises(KeyError):
            builder.create_vtl_resolver(
                field_name="getThing",
                type_name="Query",
                datasource_name="things",
                request_template=MagicMock(),
                response_template=MagicMock(),
            )


class TestCreateCrudResolver:
    """Tests for CRUD resolver creation."""

    def test_uses_crud_templates(self, builder):
        with patch("cdk.appsync.resolver_builder.crud_templates", return_value=("req", "resp")) as mock_templates:
            builder.create_crud_resolver(
                field_name="deleteProject",
                type_name="Mutation",
                datasource_name="projects",
                operation="delete",
            )

        mock_templates.assert_called_once_with("delete", "id")
        call_args = builder.datasources["projects"].create_resolver.call_args
        assert call_args[0][0] == "MutationDeleteProjectResolver"
        assert call_args[1]["request_mapping_template"] == "req"
        assert call_args[1]["response_mapping_template"] == "resp"


class TestCreateLambdaResolver:
    """Tests for Lambda resolver creation."""

    def test_calls_lambda_datasource(self, builder):
        builder.create_lambda_resolver(
            field_name="askAIQuestion",
            type_name="Query",
            lambda_datasource_name="ai_advocate",
        )

        call_args = builder.lambda_datasources["ai_advocate"].create_resolver.call_args
        assert call_args[0][0] == "QueryAskAIQuestionResolver"
        assert call_args[1] == {"type_name": "Query", "field_name": "askAIQuestion"}


class TestCreateBatchResolvers:
    """Tests for batch resolver creation."""

    def test_creates_each_type(self, builder):
        with patch("cdk.appsync.resolver_builder.appsync"):
            created = builder.create_batch_resolvers(
                [
                    {
                        "type": "vtl",
                        "field_name": "getDeveloper",
                        "type_name": "Query",
                        "datasource_name": "developers",
                        "request_template": MagicMock(),
                        "response_template": MagicMock(),
                    },
                    {
                        "type": "crud",
                        "field_name": "listProjects",
                        "type_name": "Query",
                        "datasource_name": "projects",
                        "operation": "list",
                    },
                    {
                        "type": "lambda",
                        "field_name": "getJobMatching",
                        "type_name": "Query",
                        "lambda_datasource_name": "job_matching",
                    },
                ]
            )

        assert len(created) == 3
        builder.datasources["developers"].create_resolver.assert_called_once()
        builder.datasources["projects"].create_resolver.assert_called_once()
        builder.lambda_datasources["job_matching"].create_resolver.assert_called_once()

    def test_unknown_type(self, builder):
        with pytest.raises(ValueError, match="Unknown resolver type: js"):
            builder.create_batch_resolvers([{"type": "js", "field_name": "x", "type_name": "Query"}])
