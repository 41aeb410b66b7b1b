#!/usr/bin/env python3
"""
Seed JobMatching-{stage} with sample recruiter records for local testing.

Usage:
    ENVIRONMENT=dev python scripts/seed_job_matching.py
"""

import os
import sys
from typing import Any, Dict, List

import boto3
from botocore.exceptions import ClientError

SAMPLE_DATA: List[Dict[str, Any]] = [
    {
        "linkId": "test123",
        "companyName": "Example Tech",
        "recruiterName": "Jane Smith",
        "context": "Full Stack Development",
        "greeting": "Hi Jane! Thanks for checking out my portfolio.",
        "message": (
            "I noticed Example Tech is looking for Full Stack developers. My experience with "
            "AWS, React, and Node.js aligns perfectly with your requirements."
        ),
        "skills": ["AWS", "React", "Node.js", "TypeScript", "DynamoDB"],
    },
    {
        "linkId": "296850ee-5f11-4a5f-910a-a6c2dff8f52e",
        "companyName": "Test Company",
        "recruiterName": "John Doe",
        "context": "Full Stack Developer",
        "greeting": "Hi John! Thanks for checking out my portfolio.",
        "message": (
            "I see Test Company is looking for Full Stack developers. My experience with AWS, "
            "React, and serverless architectures would be a great fit."
        ),
        "skills": ["AWS", "React", "Node.js", "Lambda", "DynamoDB"],
    },
    {
        "linkId": "demo456",
        "companyName": "Innovation Labs",
        "recruiterName": "Mark Johnson",
        "context": "Cloud Architecture",
        "greeting": "Hello Mark! Great to connect with Innovation Labs.",
        "message": (
            "Your focus on cloud architecture matches my experience designing scalable AWS "
            "solutions and implementing serverless architectures."
        ),
        "skills": ["AWS CDK", "Serverless", "Lambda", "API Gateway", "DynamoDB"],
    },
]


def seed_table(table: Any) -> int:
    for item in SAMPLE_DATA:
        print(f"Adding item for {item['companyName']}...")
        table.put_item(Item=item)
    return len(SAMPLE_DATA)


def main() -> int:
    stage = os.getenv("ENVIRONMENT", "dev")
    table_name = f"JobMatching-{stage}"
    dynamodb = boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION", "eu-central-1"))

    print(f"Seeding {table_name} table...")
    try:
        seed_table(dynamodb.Table(table_name))
    except ClientError as e:
        print(f"Error seeding table: {e}")
        return 1

    print("Seeding completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
