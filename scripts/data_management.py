#!/usr/bin/env python3
"""
Manage the static portfolio data files.

Commands:
    upload     Validate data/{stage}/*.json and upload them to the data bucket
    download   Fetch the data files from the bucket into a directory (or stdout)
    populate   Write data/{stage}/*.json straight into the DynamoDB tables

Bucket and table names are resolved from SSM (/portfolio/{stage}/...).

Usage:
    python scripts/data_management.py upload --stage dev
    python scripts/data_management.py download --stage prod --output /tmp/prod-data
    python scripts/data_management.py populate --stage dev
"""

import argparse
import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import boto3
from botocore.exceptions import ClientError

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from src.utils.dynamodb import batch_put, get_table  # noqa: E402
from src.utils.ssm import MAIN_REGION, build_ssm_path, get_parameter  # noqa: E402
from src.utils.validation import collect_validation_errors  # noqa: E402

DATA_DIR = REPO_ROOT / "data"
DATA_FILES = ("developer.json", "projects.json")
TABLE_PARAMS = {"developer.json": "DEVELOPER_TABLE_NAME", "projects.json": "PROJECTS_TABLE_NAME"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Manage portfolio data files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("upload", "Validate and upload data files to S3"),
        ("download", "Download data files from S3"),
        ("populate", "Write data files into DynamoDB"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--stage", choices=["dev", "prod"], default="dev", help="Stage (default: dev)")
        sub.add_argument("--data-dir", type=Path, default=DATA_DIR, help="Root of the data directory")
        if name == "download":
            sub.add_argument("--output", type=Path, help="Directory to write to (default: stdout)")

    return parser.parse_args(argv)


def load_stage_data(data_dir: Path, stage: str) -> Dict[str, List[Dict[str, Any]]]:
    data = {}
    for filename in DATA_FILES:
        with open(data_dir / stage / filename, encoding="utf-8") as f:
            data[filename] = json.load(f, parse_float=Decimal)
    return data


def validate_stage_data(data: Dict[str, List[Dict[str, Any]]]) -> bool:
    errors = collect_validation_errors(data["developer.json"], data["projects.json"])
    for error in errors:
        print(f"  ✗ {error}")
    if not errors:
        print("✓ Data validated")
    return not errors


def upload(stage: str, data_dir: Path) -> int:
    if not validate_stage_data(load_stage_data(data_dir, stage)):
        print("Error: Validation failed, nothing uploaded")
        return 1

    bucket = get_parameter(build_ssm_path(stage, "DATA_BUCKET_NAME"), region_name=MAIN_REGION)
    s3 = boto3.client("s3", region_name=MAIN_REGION)
    for filename in DATA_FILES:
        key = f"{stage}/{filename}"
        s3.upload_file(str(data_dir / stage / filename), bucket, key)
        print(f"  ✓ Uploaded s3://{bucket}/{key}")
    return 0


def download(stage: str, output: Optional[Path]) -> int:
    bucket = get_parameter(build_ssm_path(stage, "DATA_BUCKET_NAME"), region_name=MAIN_REGION)
    s3 = boto3.client("s3", region_name=MAIN_REGION)
    if output:
        output.mkdir(parents=True, exist_ok=True)

    for filename in DATA_FILES:
        body = s3.get_object(Bucket=bucket, Key=f"{stage}/{filename}")["Body"].read().decode("utf-8")
        if output:
            (output / filename).write_text(body, encoding="utf-8")
            print(f"  ✓ Wrote {output / filename}")
        else:
            print(f"--- {filename} ---")
            print(body)
    return 0


def populate(stage: str, data_dir: Path) -> int:
    data = load_stage_data(data_dir, stage)
    if not validate_stage_data(data):
        print("Error: Validation failed, nothing written")
        return 1

    for filename, param in TABLE_PARAMS.items():
        table_name = get_parameter(build_ssm_path(stage, param), region_name=MAIN_REGION)
        count = batch_put(get_table(table_name, MAIN_REGION), data[filename])
        print(f"  ✓ Wrote {count} items to {table_name}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    print(f"{args.command} ({args.stage})")
    try:
        if args.command == "upload":
            return upload(args.stage, args.data_dir)
        if args.command == "download":
            return download(args.stage, args.output)
        return populate(args.stage, args.data_dir)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Could not read data files: {e}")
        return 1
    except ClientError as e:
        print(f"Error: AWS request failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
