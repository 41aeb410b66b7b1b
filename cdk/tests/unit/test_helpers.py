"""Tests for CDK helper utilities."""

import os
from unittest.mock import patch

import pytest

from cdk.helpers import (
    DEFAULT_BEDROCK_MODEL_ID,
    REGION_ABBREVIATIONS,
    SUPPORTED_MODELS,
    get_bedrock_model_id,
    get_environment,
    get_region,
    get_region_abbrev,
    get_site_domain,
    make_resource_namer,
)


class TestRegionAbbreviations:
    """Tests for REGION_ABBREVIATIONS constant."""

    def test_eu_central_1(self):
        """EU Central 1 abbreviation is ec1."""
        assert REGION_ABBREVIATIONS["eu-central-1"] == "ec1"

    def test_us_east_1(self):
        """US East 1 abbreviation is ue1."""
        assert REGION_ABBREVIATIONS["us-east-1"] == "ue1"


class TestGetRegion:
    """Tests for get_region function."""

    def test_returns_aws_region_env_var(self):
        """Returns AWS_REGION environment variable when set."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=True):
            assert get_region() == "us-west-2"

    def test_returns_cdk_default_region_if_aws_region_not_set(self):
        """Returns CDK_DEFAULT_REGION when AWS_REGION is not set."""
        with patch.dict(os.environ, {"CDK_DEFAULT_REGION": "eu-west-1"}, clear=True):
            assert get_region() == "eu-west-1"

    def test_defaults_to_main_region(self):
        """Returns eu-central-1 when no region environment variables are set."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_region() == "eu-central-1"


class TestGetRegionAbbrev:
    """Tests for get_region_abbrev function."""

    def test_known_region(self):
        assert get_region_abbrev("us-east-1") == "ue1"

    def test_unknown_region_uses_prefix(self):
        """Unknown regions fall back to the first three characters."""
        assert get_region_abbrev("ap-south-2") == "ap-"

    def test_reads_environment_when_none(self):
        with patch.dict(os.environ, {"AWS_REGION": "eu-central-1"}, clear=True):
            assert get_region_abbrev() == "ec1"


class TestGetEnvironment:
    """Tests for get_environment function."""

    def test_explicit_value(self):
        assert get_environment("prod") == "prod"

    def test_reads_environment_variable(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "prod"}, clear=True):
            assert get_environment() == "prod"

    def test_defaults_to_dev(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_environment() == "dev"

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValueError, match="Invalid environment 'staging'"):
            get_environment("staging")


class TestGetBedrockModelId:
    """Tests for get_bedrock_model_id function."""

    def test_defaults_to_claude_haiku(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_bedrock_model_id() == DEFAULT_BEDROCK_MODEL_ID

    def test_reads_environment_variable(self):
        with patch.dict(os.environ, {"BEDROCK_MODEL_ID": "amazon.titan-text-lite-v1"}, clear=True):
            assert get_bedrock_model_id() == "amazon.titan-text-lite-v1"

    def test_rejects_unsupported_model(self):
        with pytest.raises(ValueError, match="Unsupported Bedrock model"):
            get_bedrock_model_id("meta.llama3-8b-instruct-v1:0")

    def test_supported_models_include_ollama(self):
        assert "ollama" in SUPPORTED_MODELS


class TestMakeResourceNamer:
    """Tests for make_resource_namer function."""

    def test_appends_environment(self):
        """Names carry only the environment suffix."""
        rn = make_resource_namer("dev")
        assert rn("PortfolioDevelopers") == "PortfolioDevelopers-dev"
        assert rn("link-generator") == "link-generator-dev"

    def test_env_override(self):
        rn = make_resource_namer("dev")
        assert rn("visitor-context", env="prod") == "visitor-context-prod"


class TestGetSiteDomain:
    """Tests for get_site_domain function."""

    def test_site_domain_env_wins(self):
        with patch.dict(os.environ, {"SITE_DOMAIN": "d123.cloudfront.net"}, clear=True):
            assert get_site_domain("prod") == "d123.cloudfront.net"

    def test_prod_domain_name(self):
        with patch.dict(os.environ, {"PROD_DOMAIN_NAME": "portfolio.example.com"}, clear=True):
            assert get_site_domain("prod") == "portfolio.example.com"

    def test_dev_placeholder(self):
        with patch.dict(os.environ, {"PROD_DOMAIN_NAME": "portfolio.example.com"}, clear=True):
            assert get_site_domain("dev") == "dev.portfolio.local"
