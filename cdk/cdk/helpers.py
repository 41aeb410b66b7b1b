"""
Shared helper utilities for CDK stack construction.

This module provides:
- Region abbreviation mapping for stack naming
- Resource naming function (rn)
- Environment and Bedrock model configuration
"""

import os
from typing import Callable, Optional

# Region abbreviation mapping for stack naming
# Pattern: PortfolioStack-{region_abbrev}-{env} e.g. PortfolioStack-ec1-dev
REGION_ABBREVIATIONS: dict[str, str] = {
    "us-east-1": "ue1",
    "us-east-2": "ue2",
    "us-west-2": "uw2",
    "eu-west-1": "ew1",
    "eu-west-2": "ew2",
    "eu-central-1": "ec1",
    "eu-north-1": "en1",
}

MAIN_REGION = "eu-central-1"
# Lambda@Edge functions must be created in us-east-1
EDGE_REGION = "us-east-1"

ENVIRONMENTS = ("dev", "prod")

DEFAULT_BEDROCK_MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"

# Keep in sync with src/utils/model_adapters.py
SUPPORTED_MODELS: tuple[str, ...] = (
    "amazon.titan-text-express-v1",
    "amazon.titan-text-lite-v1",
    "anthropic.claude-3-haiku-20240307-v1:0",
    "anthropic.claude-3-sonnet-20240229-v1:0",
    "anthropic.claude-3-5-sonnet-20240620-v1:0",
    "anthropic.claude-3-5-sonnet-20241022-v2:0",
    "ollama",
)


def get_region() -> str:
    """Get the AWS region from environment variables or default to the main region."""
    return os.getenv("AWS_REGION") or os.getenv("CDK_DEFAULT_REGION") or MAIN_REGION


def get_region_abbrev(region: Optional[str] = None) -> str:
    """Get the region abbreviation for stack naming.

    Args:
        region: AWS region code. If None, reads from environment.

    Returns:
        Region abbreviation (e.g., 'ec1' for 'eu-central-1')
    """
    if region is None:
        region = get_region()
    return REGION_ABBREVIATIONS.get(region, region[:3])


def get_environment(value: Optional[str] = None) -> str:
    """Resolve and validate the deployment environment (dev or prod).

    Raises:
        ValueError: If the environment is not one of ENVIRONMENTS
    """
    env_name = value or os.getenv("ENVIRONMENT", "dev")
    if env_name not in ENVIRONMENTS:
        raise ValueError(f"Invalid environment '{env_name}', expected one of {', '.join(ENVIRONMENTS)}")
    return env_name


def get_bedrock_model_id(value: Optional[str] = None) -> str:
    """Resolve BEDROCK_MODEL_ID and reject models the resolvers cannot drive."""
    model_id = value or os.getenv("BEDROCK_MODEL_ID") or DEFAULT_BEDROCK_MODEL_ID
    if model_id not in SUPPORTED_MODELS:
        raise ValueError(f"Unsupported Bedrock model '{model_id}'. Supported: {', '.join(SUPPORTED_MODELS)}")
    return model_id


def make_resource_namer(env_name: str) -> Callable[[str], str]:
    """Create a resource naming function.

    Physical names carry only the environment suffix so that scripts and the
    edge function can address them (PortfolioDevelopers-dev, link-generator-dev).

    Args:
        env_name: Environment name (e.g., 'dev', 'prod')

    Returns:
        A function that takes a base name and returns a fully qualified name
    """

    def rn(name: str, env: str = env_name) -> str:
        """Generate resource name with environment suffix."""
        return f"{name}-{env}"

    return rn


def get_site_domain(env_name: str) -> str:
    """Public site domain used in visitor links.

    SITE_DOMAIN wins; otherwise prod uses PROD_DOMAIN_NAME and dev falls back
    to a placeholder until the distribution domain is known.
    """
    if site_domain := os.getenv("SITE_DOMAIN"):
        return site_domain
    if env_name == "prod" and (prod_domain := os.getenv("PROD_DOMAIN_NAME")):
        return prod_domain
    return f"{env_name}.portfolio.local"
