"""
Visitor link generator Lambda.

Invoked directly (admin API, scripts). Creates a temporary Cognito visitor
user, records the visitor link with a TTL and returns the shareable URL, or
removes a link with `{"action": "remove", "linkId": ...}`.
"""

import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

# Handle both Lambda (absolute) and unit test (relative) imports
try:  # pragma: no cover
    from utils.dynamodb import get_required_env, tables  # type: ignore[import-not-found]
    from utils.errors import AppError, ErrorCode  # type: ignore[import-not-found]
    from utils.ids import (  # type: ignore[import-not-found]
        LINK_TTL_DAYS,
        generate_link_id,
        generate_password,
        is_valid_link_id,
        visitor_user_attributes,
        visitor_username,
    )
    from utils.logging import get_logger  # type: ignore[import-not-found]
    from utils.responses import build_http_response  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover
    from ..utils.dynamodb import get_required_env, tables
    from ..utils.errors import AppError, ErrorCode
    from ..utils.ids import (
        LINK_TTL_DAYS,
        generate_link_id,
        generate_password,
        is_valid_link_id,
        visitor_user_attributes,
        visitor_username,
    )
    from ..utils.logging import get_logger
    from ..utils.responses import build_http_response

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400

RECRUITER_FIELDS = (
    "companyName",
    "recruiterName",
    "context",
    "greeting",
    "message",
    "requiredSkills",
    "preferredSkills",
    "jobTitle",
    "jobDescription",
    "companyIndustry",
    "companySize",
)
ATTRIBUTION_FIELDS = ("companyName", "recruiterName", "context")


def calculate_ttl(days: int = LINK_TTL_DAYS) -> int:
    """Unix timestamp `days` from now, used as the DynamoDB TTL."""
    return int(time.time()) + days * SECONDS_PER_DAY


def _get_cognito() -> Any:
    return boto3.client("cognito-idp")


def create_visitor_user(user_pool_id: str, link_id: str) -> str:
    """
    Create the Cognito visitor user with a permanent password. Returns the password.

    A user that already exists (created by the admin console) keeps its
    account; its linkId attribute is refreshed and it gets a new password,
    so the returned password always matches the stored link item.
    """
    cognito = _get_cognito()
    username = visitor_username(link_id)
    password = generate_password()

    try:
        cognito.admin_create_user(
            UserPoolId=user_pool_id,
            Username=username,
            MessageAction="SUPPRESS",
            UserAttributes=visitor_user_attributes(link_id),
        )
    except ClientError as e:
        if e.response["Error"]["Code"] != "UsernameExistsException":
            raise
        logger.info("Visitor user already exists, resetting password", link_id=link_id)
        cognito.admin_update_user_attributes(
            UserPoolId=user_pool_id,
            Username=username,
            UserAttributes=[{"Name": "custom:linkId", "Value": link_id}],
        )

    cognito.admin_set_user_password(
        UserPoolId=user_pool_id,
        Username=username,
        Password=password,
        Permanent=True,
    )
    return password


def create_link(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a visitor link.

    Args:
        event: Optional linkId, createRecruiterProfile flag and recruiter fields

    Returns:
        200 response with linkId and the shareable link
    """
    user_pool_id = get_required_env("USER_POOL_ID")
    site_domain = get_required_env("SITE_DOMAIN")

    link_id = event.get("linkId") or generate_link_id()
    if not is_valid_link_id(link_id):
        raise AppError(ErrorCode.INVALID_INPUT, f"Invalid linkId: {link_id}")

    password = create_visitor_user(user_pool_id, link_id)

    link_item: Dict[str, Any] = {
        "linkId": link_id,
        "password": password,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "ttl": calculate_ttl(),
    }
    link_item.update({field: event[field] for field in ATTRIBUTION_FIELDS if event.get(field)})
    tables.visitor_links.put_item(Item=link_item)

    if event.get("createRecruiterProfile"):
        create_recruiter_profile(link_id, event)

    logger.info("Visitor link created", link_id=link_id)
    return build_http_response(200, {"linkId": link_id, "link": f"https://{site_domain}/?visitor={link_id}"})


def create_recruiter_profile(link_id: str, event: Dict[str, Any]) -> Dict[str, Any]:
    now = int(time.time() * 1000)
    profile: Dict[str, Any] = {"linkId": link_id, "createdAt": now, "updatedAt": now}
    profile.update({field: event[field] for field in RECRUITER_FIELDS if event.get(field) is not None})
    tables.recruiter_profiles.put_item(Item=profile)
    return profile


def remove_link(event: Dict[str, Any]) -> Dict[str, Any]:
    """Delete a visitor link and its Cognito user."""
    link_id: Optional[str] = event.get("linkId")
    if not link_id:
        raise AppError(ErrorCode.INVALID_INPUT, "linkId is required to remove a link")

    user_pool_id = get_required_env("USER_POOL_ID")
    tables.visitor_links.delete_item(Key={"linkId": link_id})
    try:
        _get_cognito().admin_delete_user(UserPoolId=user_pool_id, Username=visitor_username(link_id))
    except ClientError as e:
        if e.response["Error"]["Code"] != "UserNotFoundException":
            raise
        logger.warning("Visitor user already gone", link_id=link_id)

    logger.info("Visitor link removed", link_id=link_id)
    return build_http_response(200, {"message": f"Link {link_id} removed"})


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Entry point: create a link, or remove one when action == "remove".

    Returns:
        {statusCode, body}; 400 for bad input, 500 for configuration or AWS failures
    """
    logger.info("Link generator invoked", action=event.get("action", "create"), stage=os.getenv("ENVIRONMENT"))
    try:
        if event.get("action") == "remove":
            return remove_link(event)
        return create_link(event)
    except AppError as e:
        logger.warning("Rejected link request", error=e.message)
        return build_http_response(400, {"error": e.message, **e.to_dict()})
    except Exception as e:
        logger.error("Link generation failed", error=str(e), exc_info=True)
        return build_http_response(500, {"error": str(e)})
