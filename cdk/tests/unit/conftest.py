"""Shared fixtures for CDK construct tests."""

import pytest
from aws_cdk import App, Environment, Stack

TEST_ACCOUNT = "123456789012"


@pytest.fixture
def stack():
    """A main-region stack with an explicit environment."""
    app = App()
    return Stack(app, "TestStack", env=Environment(account=TEST_ACCOUNT, region="eu-central-1"))


@pytest.fixture
def edge_stack():
    """A us-east-1 stack, required by Lambda@Edge constructs."""
    app = App()
    return Stack(app, "TestEdgeStack", env=Environment(account=TEST_ACCOUNT, region="us-east-1"))


@pytest.fixture
def rn():
    """Create a resource naming function."""

    def _rn(name: str) -> str:
        return f"{name}-test"

    return _rn
