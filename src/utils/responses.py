"""
GraphQL response builders for Lambda resolvers.

Provides the fixed response contracts returned by the job-matching and
AI-advocate resolvers, including the fail-soft defaults.
"""

import json
import os
from decimal import Decimal
from typing import Any, Dict, List, Optional, TypedDict, cast


class AdvocateGreetingResponse(TypedDict):
    """GraphQL AdvocateGreeting / JobMatching response type."""

    linkId: str
    companyName: Optional[str]
    recruiterName: Optional[str]
    context: Optional[str]
    greeting: Optional[str]
    message: Optional[str]
    skills: Optional[List[str]]


class AIAnswerResponse(TypedDict):
    """GraphQL AIResponse type."""

    answer: str
    context: Optional[str]


def build_default_response(link_id: str = "unknown") -> AdvocateGreetingResponse:
    """
    Build the placeholder response returned when no record can be served.

    Args:
        link_id: "unknown" when no key could be derived, "error" on failure,
            otherwise the key that had no record

    Returns:
        Response with every data field set to None
    """
    return AdvocateGreetingResponse(
        linkId=link_id,
        companyName=None,
        recruiterName=None,
        context=None,
        greeting=None,
        message=None,
        skills=None,
    )


def resolve_skills(item: Dict[str, Any]) -> List[str]:
    """Skills of interest: required, then preferred, else empty."""
    skills = item.get("requiredSkills") or item.get("preferredSkills") or []
    return [str(s) for s in skills]


def build_greeting_response(
    item: Dict[str, Any], message: Optional[str] = None, skills: Optional[List[str]] = None
) -> AdvocateGreetingResponse:
    """
    Build an AdvocateGreeting response from a recruiter profile item.

    Args:
        item: DynamoDB item dictionary
        message: Generated message; falls back to the stored one
        skills: Skills to report; defaults to resolve_skills(item)

    Returns:
        AdvocateGreetingResponse with normalized fields
    """
    return AdvocateGreetingResponse(
        linkId=cast(str, item.get("linkId", "unknown")),
        companyName=item.get("companyName"),
        recruiterName=item.get("recruiterName"),
        context=item.get("context"),
        greeting=item.get("greeting"),
        message=message or item.get("message"),
        skills=skills if skills is not None else resolve_skills(item),
    )


def build_answer_response(answer: str, context: Optional[str] = None) -> AIAnswerResponse:
    """Build an AIResponse payload."""
    return AIAnswerResponse(answer=answer, context=context)


def _json_default(value: Any) -> Any:
    # DynamoDB returns numbers as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def cors_headers() -> Dict[str, str]:
    """CORS headers for API Gateway proxy responses."""
    return {
        "Access-Control-Allow-Origin": os.getenv("ALLOWED_ORIGIN", "*"),
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "GET,OPTIONS",
        "Access-Control-Allow-Credentials": "true",
        "Content-Type": "application/json",
    }


def build_http_response(status_code: int, body: Any = None, cors: bool = False) -> Dict[str, Any]:
    """Build an API Gateway / Lambda invoke style {statusCode, body} response."""
    response: Dict[str, Any] = {
        "statusCode": status_code,
        "body": json.dumps(body, default=_json_default) if body is not None else "",
    }
    if cors:
        response["headers"] = cors_headers()
    return response
