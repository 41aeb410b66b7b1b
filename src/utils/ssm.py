"""SSM Parameter Store helpers shared by the edge function and tooling."""

from typing import Dict, List, Optional

import boto3

SSM_PREFIX = "/portfolio"

# Lambda@Edge cannot receive environment variables, so regions are fixed here
MAIN_REGION = "eu-central-1"
EDGE_REGION = "us-east-1"


def build_ssm_path(stage: str, name: str) -> str:
    """Build a parameter path such as /portfolio/dev/VISITOR_TABLE_NAME."""
    return f"{SSM_PREFIX}/{stage}/{name}"


def get_parameter(name: str, region_name: Optional[str] = None, decrypt: bool = True) -> str:
    """Fetch a single parameter value. Missing parameters raise ParameterNotFound."""
    client = boto3.client("ssm", region_name=region_name)
    response = client.get_parameter(Name=name, WithDecryption=decrypt)
    return str(response["Parameter"]["Value"])


def get_parameters(names: List[str], region_name: Optional[str] = None) -> Dict[str, str]:
    """Fetch several parameters at once, keyed by the trailing path segment.

    Args:
        names: Full parameter paths
        region_name: Region holding the parameters

    Returns:
        Mapping such as {"COGNITO_CLIENT_ID": "..."}; missing names are omitted
    """
    client = boto3.client("ssm", region_name=region_name)
    response = client.get_parameters(Names=names, WithDecryption=True)
    return {p["Name"].rsplit("/", 1)[-1]: p["Value"] for p in response.get("Parameters", [])}
