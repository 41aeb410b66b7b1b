"""
Test data builders for Lambda function tests.

Factory functions with sensible defaults, so tests only spell out the fields
they care about.
"""

from typing import Any, Dict, List, Optional
from uuid import uuid4

DEVELOPER_ID = "DEVELOPER_PROFILE"


def make_link_id() -> str:
    return str(uuid4())


def make_developer(**overrides: Any) -> Dict[str, Any]:
    """Build a developer record that passes validation."""
    developer: Dict[str, Any] = {
        "id": DEVELOPER_ID,
        "name": "Jane Doe",
        "title": "Senior Software Engineer",
        "bio": "Builds serverless systems.",
        "email": "jane@example.com",
        "location": "Berlin",
        "yearsOfExperience": 8,
        "isActive": True,
        "skillSets": [
            {"id": "backend", "name": "Backend", "skills": ["Python", "Node.js", "DynamoDB"]},
            {"id": "frontend", "name": "Frontend", "skills": ["React.js", "TypeScript"]},
        ],
    }
    developer.update(overrides)
    return developer


def make_project(project_id: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    """Build a project record owned by DEVELOPER_ID."""
    project: Dict[str, Any] = {
        "id": project_id or f"project-{uuid4().hex[:8]}",
        "title": "Portfolio Site",
        "description": "Serverless portfolio with an AI advocate.",
        "status": "Active",
        "developerId": DEVELOPER_ID,
        "tech": ["Python", "AWS CDK"],
        "highlights": ["Lambda@Edge visitor links"],
    }
    project.update(overrides)
    return project


def make_recruiter_profile(link_id: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    """Build a recruiter profile keyed by linkId."""
    profile: Dict[str, Any] = {
        "linkId": link_id or make_link_id(),
        "recruiterName": "Sam Recruiter",
        "companyName": "Acme",
        "context": "Platform team hiring",
        "greeting": "Hello Sam!",
        "message": "Thanks for visiting.",
        "requiredSkills": ["Python", "React"],
        "preferredSkills": ["Go"],
        "jobTitle": "Staff Engineer",
    }
    profile.update(overrides)
    return profile


def make_appsync_event(
    field_name: str,
    arguments: Optional[Dict[str, Any]] = None,
    claims: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build an AppSync Lambda resolver event."""
    event: Dict[str, Any] = {
        "arguments": arguments or {},
        "info": {"fieldName": field_name, "parentTypeName": "Query"},
        "requestContext": {"requestId": "req-123"},
    }
    if claims is not None:
        event["identity"] = {"claims": claims, "sub": claims.get("sub", "")}
    return event


def make_cloudfront_event(
    event_type: str = "viewer-request",
    uri: str = "/",
    querystring: str = "",
    request_headers: Optional[Dict[str, List[Dict[str, str]]]] = None,
    response: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a Lambda@Edge event with a single record."""
    cf: Dict[str, Any] = {
        "config": {"eventType": event_type, "distributionId": "E123"},
        "request": {
            "uri": uri,
            "querystring": querystring,
            "method": "GET",
            "headers": request_headers or {},
        },
    }
    if event_type == "viewer-response":
        cf["response"] = response or {"status": "200", "headers": {}}
    return {"Records": [{"cf": cf}]}
