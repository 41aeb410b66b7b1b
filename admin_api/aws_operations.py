"""
AWS operations behind the admin console.

Table names are resolved from SSM per stage; records are read and written
directly in DynamoDB and exported to `data/{stage}/*.json` for deployment.
"""

import json
import logging
import os
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.utils.ids import generate_password, visitor_user_attributes, visitor_username

from .config import ADMIN_CONFIG, AdminConfig

logger = logging.getLogger(__name__)


def to_dynamo(item: Any) -> Any:
    """Convert floats to Decimal so JSON payloads can be written to DynamoDB."""
    return json.loads(json.dumps(item), parse_float=Decimal)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_json(data: Any) -> str:
    """Serialise with sorted keys and a trailing newline for stable git diffs."""
    return json.dumps(data, indent=2, sort_keys=True, default=_json_default) + "\n"


class AWSOperations:
    """DynamoDB, SSM, Cognito, Lambda and S3 access for one admin console."""

    def __init__(self, config: AdminConfig = ADMIN_CONFIG, session: Optional[boto3.session.Session] = None):
        self.config = config
        session = session or boto3.session.Session(region_name=config.region)
        self.dynamodb = session.resource("dynamodb")
        self.ssm = session.client("ssm")
        self.cognito = session.client("cognito-idp")
        self.lambda_client = session.client("lambda")
        self.s3 = session.client("s3")
        self._table_names_cache: Dict[str, Dict[str, str]] = {}

    def get_ssm_parameter(self, stage: str, param_name: str) -> str:
        name = self.config.ssm_path(stage, param_name)
        try:
            return str(self.ssm.get_parameter(Name=name)["Parameter"]["Value"])
        except ClientError as e:
            raise RuntimeError(f"Failed to get SSM parameter {name}: {e}") from e

    def get_table_names(self, stage: str) -> Dict[str, str]:
        """Resolve physical table names for a stage (cached unless ENVIRONMENT=test)."""
        use_cache = os.getenv("ENVIRONMENT") != "test"
        if use_cache and stage in self._table_names_cache:
            return self._table_names_cache[stage]

        names = {
            table: self.get_ssm_parameter(stage, table_config.ssm_param)
            for table, table_config in self.config.tables.items()
        }
        if use_cache:
            self._table_names_cache[stage] = names
        return names

    def _table(self, stage: str, table_name: str) -> Any:
        return self.dynamodb.Table(self.get_table_names(stage)[table_name])

    def get_all_items(self, stage: str, table_name: str) -> List[Dict[str, Any]]:
        table = self._table(stage, table_name)
        response = table.scan()
        items: List[Dict[str, Any]] = list(response.get("Items", []))
        while "LastEvaluatedKey" in response:
            response = table.scan(ExclusiveStartKey=response["LastEvaluatedKey"])
            items.extend(response.get("Items", []))
        return items

    def create_item(self, stage: str, table_name: str, item: Dict[str, Any]) -> None:
        if table_name == "developer":
            raise ValueError("Cannot create new items in developer table. Use updateItem instead.")
        self._table(stage, table_name).put_item(Item=to_dynamo(item))

    def update_item(self, stage: str, table_name: str, item: Dict[str, Any]) -> None:
        if table_name == "developer" and not self.get_all_items(stage, table_name):
            raise ValueError("No developer profile exists. Create one through data import first.")
        self._table(stage, table_name).put_item(Item=to_dynamo(item))

    def replace_item(self, stage: str, table_name: str, key: Dict[str, Any], item: Dict[str, Any]) -> None:
        """
        Replace a record wholesale: delete the addressed key, then put the item.

        Not atomic; the console assumes it is the only writer for the stage.
        """
        table = self._table(stage, table_name)
        table.delete_item(Key=key)
        table.put_item(Item=to_dynamo(item))

    def delete_item(self, stage: str, table_name: str, key: Dict[str, Any]) -> None:
        if table_name == "developer":
            raise ValueError("Cannot delete from developer table.")
        self._table(stage, table_name).delete_item(Key=key)

    def export_to_files(self, stage: str) -> Dict[str, Dict[str, Any]]:
        """Write every managed table to data/{stage}/<file>.json."""
        data_dir = self.config.data_dir(stage)
        data_dir.mkdir(parents=True, exist_ok=True)

        results: Dict[str, Dict[str, Any]] = {}
        for table_name, table_config in self.config.tables.items():
            items = self.get_all_items(stage, table_name)
            (data_dir / table_config.file).write_text(dump_json(items), encoding="utf-8")
            results[table_name] = {"items": len(items), "file": table_config.file}
            logger.info("Exported %s items from %s (%s)", len(items), table_name, stage)
        return results

    def upload_exports(self, stage: str) -> List[str]:
        """Upload exported files to the data bucket under {stage}/. Returns the keys."""
        bucket = self.get_ssm_parameter(stage, self.config.data_bucket_param)
        data_dir = self.config.data_dir(stage)
        keys = []
        for table_config in self.config.tables.values():
            path = data_dir / table_config.file
            if not path.exists():
                continue
            key = f"{stage}/{table_config.file}"
            self.s3.upload_file(str(path), bucket, key)
            keys.append(key)
        logger.info("Uploaded %s to s3://%s", ", ".join(keys), bucket)
        return keys

    def create_cognito_user(self, stage: str, link_id: str) -> Dict[str, Any]:
        """Create the visitor user for a link. Failures are reported, not raised."""
        try:
            user_pool_id = self.get_ssm_parameter(stage, self.config.cognito_user_pool_param)
            username = visitor_username(link_id)
            password = generate_password()
            self.cognito.admin_create_user(
                UserPoolId=user_pool_id,
                Username=username,
                MessageAction="SUPPRESS",
                UserAttributes=visitor_user_attributes(link_id),
            )
            self.cognito.admin_set_user_password(
                UserPoolId=user_pool_id, Username=username, Password=password, Permanent=True
            )
        except (ClientError, BotoCoreError, RuntimeError) as e:
            logger.error("Error creating Cognito user for %s: %s", link_id, e)
            return {"success": False, "error": str(e)}
        return {"success": True, "username": username, "password": password}

    def invoke_link_generator(self, stage: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Invoke the link generator Lambda and return its decoded body.

        Raises:
            RuntimeError: If the function reports a non-200 status
        """
        function_name = self.config.link_generator_template.replace("{stage}", stage)
        logger.info("Invoking %s with %s", function_name, payload)
        response = self.lambda_client.invoke(FunctionName=function_name, Payload=json.dumps(payload))
        result = json.loads(response["Payload"].read())

        body = json.loads(result.get("body") or "{}")
        if result.get("statusCode") != 200:
            raise RuntimeError(body.get("error") or "Lambda execution failed")
        return dict(body)
