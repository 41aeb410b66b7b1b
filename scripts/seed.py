#!/usr/bin/env python3
"""
Seed the developer and projects tables with the bundled sample data.

Reads data/{ENVIRONMENT}/developer.json and projects.json, validates them and
batch-writes PortfolioDevelopers-{env} and PortfolioProjects-{env}.
Production is never seeded.

Usage:
    ENVIRONMENT=dev python scripts/seed.py
    ENVIRONMENT=dev python scripts/seed.py --force   # overwrite non-empty tables
"""

import argparse
import json
import os
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import boto3

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from src.utils.dynamodb import batch_put  # noqa: E402
from src.utils.validation import collect_validation_errors  # noqa: E402

DATA_DIR = REPO_ROOT / "data"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Seed developer and project tables")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Write even if the tables already contain data",
    )
    return parser.parse_args(argv)


def table_names(environment: str) -> Dict[str, str]:
    return {
        "developers": f"PortfolioDevelopers-{environment}",
        "projects": f"PortfolioProjects-{environment}",
    }


def load_records(environment: str, filename: str, data_dir: Path = DATA_DIR) -> List[Dict[str, Any]]:
    path = data_dir / environment / filename
    with open(path, encoding="utf-8") as f:
        records: List[Dict[str, Any]] = json.load(f, parse_float=Decimal)
    return records


def has_items(table: Any) -> bool:
    return bool(table.scan(Limit=1).get("Items"))


def main(argv: Optional[Sequence[str]] = None, data_dir: Path = DATA_DIR) -> int:
    args = parse_args(argv)

    environment = os.getenv("ENVIRONMENT")
    if not environment:
        print("Error: ENVIRONMENT is not set")
        return 1
    if environment == "prod":
        print("Error: Cannot seed data in production environment")
        return 1

    try:
        developers = load_records(environment, "developer.json", data_dir)
        projects = load_records(environment, "projects.json", data_dir)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Could not read seed data: {e}")
        return 1

    errors = collect_validation_errors(developers, projects)
    if errors:
        print("Error: Seed data failed validation:")
        for error in errors:
            print(f"  ✗ {error}")
        return 1
    print("✓ Seed data validated")

    dynamodb = boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION", "eu-central-1"))
    names = table_names(environment)
    developers_table = dynamodb.Table(names["developers"])
    projects_table = dynamodb.Table(names["projects"])

    if not args.force:
        non_empty = [
            name
            for name, table in ((names["developers"], developers_table), (names["projects"], projects_table))
            if has_items(table)
        ]
        if non_empty:
            print(f"Error: {', '.join(non_empty)} already contain data. Use --force to overwrite.")
            return 1

    print(f"Seeding {names['developers']}...")
    count = batch_put(developers_table, developers)
    print(f"  ✓ {count} developers written")

    print(f"Seeding {names['projects']}...")
    count = batch_put(projects_table, projects)
    print(f"  ✓ {count} projects written")

    print("Seeding completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
