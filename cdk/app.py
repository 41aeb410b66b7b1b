#!/usr/bin/env python3
import os
from pathlib import Path

import aws_cdk as cdk

from cdk.helpers import EDGE_REGION, MAIN_REGION, get_environment, get_region_abbrev
from cdk.portfolio_stack import PortfolioEdgeStack, PortfolioStack

# Load environment variables from .env file if it exists
env_file = Path(__file__).parent / ".env"
if env_file.exists():
    with open(env_file) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                # Only set if not already in environment (allow override)
                if key.strip() and not os.getenv(key.strip()):
                    os.environ[key.strip()] = value.strip()

app = cdk.App()

# Get environment from context or environment variable (dev/prod)
env_name = get_environment(app.node.try_get_context("environment"))

account = os.getenv("AWS_ACCOUNT_ID") or os.getenv("CDK_DEFAULT_ACCOUNT")
main_region = os.getenv("AWS_REGION") or os.getenv("CDK_DEFAULT_REGION") or MAIN_REGION

edge_stack = PortfolioEdgeStack(
    app,
    f"PortfolioEdgeStack-{get_region_abbrev(EDGE_REGION)}-{env_name}",
    env_name=env_name,
    domain_name=os.getenv("PROD_DOMAIN_NAME"),
    certificate_arn=os.getenv("PROD_CERTIFICATE_ARN"),
    env=cdk.Environment(account=account, region=EDGE_REGION),
    description=f"Portfolio - Site, CloudFront and Lambda@Edge ({env_name})",
)

main_stack = PortfolioStack(
    app,
    f"PortfolioStack-{get_region_abbrev(main_region)}-{env_name}",
    env_name=env_name,
    bedrock_model_id=os.getenv("BEDROCK_MODEL_ID"),
    env=cdk.Environment(account=account, region=main_region),
    description=f"Portfolio - Data, Auth, Lambdas and AppSync ({env_name})",
)

cdk.Tags.of(app).add("Project", "portfolio")
cdk.Tags.of(app).add("Environment", env_name)

app.synth()
