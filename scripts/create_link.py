#!/usr/bin/env python3
"""
Create a visitor link by invoking the link generator Lambda.

Usage:
    python scripts/create_link.py --stage dev
    python scripts/create_link.py --stage dev --company "Acme" --recruiter "Jane Smith" --profile
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional, Sequence

import boto3
from botocore.exceptions import ClientError

REGION = "eu-central-1"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Create a visitor link")
    parser.add_argument("--stage", choices=["dev", "prod"], default="dev", help="Stage (default: dev)")
    parser.add_argument("--link-id", help="Use this link id instead of a generated one")
    parser.add_argument("--company", help="Company name shown to the visitor")
    parser.add_argument("--recruiter", help="Recruiter name shown to the visitor")
    parser.add_argument("--context", help="Why the recruiter is visiting")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Also create a recruiter profile for the AI advocate",
    )
    return parser.parse_args(argv)


def build_payload(args: argparse.Namespace) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"createRecruiterProfile": args.profile}
    for key, value in (
        ("linkId", args.link_id),
        ("companyName", args.company),
        ("recruiterName", args.recruiter),
        ("context", args.context),
    ):
        if value:
            payload[key] = value
    return payload


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    function_name = f"link-generator-{args.stage}"
    client = boto3.client("lambda", region_name=REGION)

    print(f"Invoking {function_name}...")
    try:
        response = client.invoke(FunctionName=function_name, Payload=json.dumps(build_payload(args)))
    except ClientError as e:
        print(f"Error: {e}")
        return 1

    result = json.loads(response["Payload"].read())
    body = json.loads(result.get("body") or "{}")
    if result.get("statusCode") != 200:
        print(f"Error: {body.get('error', 'Link generation failed')}")
        return 1

    print(f"✓ Link ID: {body['linkId']}")
    print(f"✓ Link:    {body['link']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
