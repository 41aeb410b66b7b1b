"""
Lambda resolvers for job-matching records.

`handler` serves the AppSync `getJobMatching` / `getJobMatchingByLinkId`
fields; `rest_handler` serves the same lookup behind API Gateway.
"""

from typing import Any, Dict, Optional

# Handle both Lambda (absolute) and unit test (relative) imports
try:  # pragma: no cover
    from utils.appsync_types import get_claims, get_link_id  # type: ignore[import-not-found]
    from utils.ids import local_part  # type: ignore[import-not-found]
    from utils.dynamodb import tables  # type: ignore[import-not-found]
    from utils.logging import get_correlation_id, get_logger  # type: ignore[import-not-found]
    from utils.responses import (  # type: ignore[import-not-found]
        AdvocateGreetingResponse,
        build_default_response,
        build_greeting_response,
        build_http_response,
    )
except ModuleNotFoundError:  # pragma: no cover
    from ..utils.appsync_types import get_claims, get_link_id
    from ..utils.ids import local_part
    from ..utils.dynamodb import tables
    from ..utils.logging import get_correlation_id, get_logger
    from ..utils.responses import (
        AdvocateGreetingResponse,
        build_default_response,
        build_greeting_response,
        build_http_response,
    )

logger = get_logger(__name__)


def get_job_matching(link_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a job-matching record by link id."""
    item: Optional[Dict[str, Any]] = tables.job_matching.get_item(Key={"linkId": link_id}).get("Item")
    return item


def handler(event: Dict[str, Any], context: Any) -> AdvocateGreetingResponse:
    """
    AppSync resolver for job-matching lookups.

    Args:
        event: AppSync resolver event; the link id comes from arguments or claims
        context: Lambda context (unused)

    Returns:
        The record shaped as AdvocateGreeting, or the default shape with
        linkId "unknown" (no key), the key (no record) or "error" (failure)
    """
    logger.set_correlation_id(get_correlation_id(event))
    try:
        link_id = get_link_id(event)
        if not link_id:
            logger.warning("No link id in arguments or claims")
            return build_default_response()

        item = get_job_matching(link_id)
        if not item:
            logger.info("No job matching record", link_id=link_id)
            return build_default_response(link_id)

        # Job-matching records carry their own skills list
        skills = [str(s) for s in item["skills"]] if item.get("skills") else None
        return build_greeting_response(item, skills=skills)
    except Exception as e:
        logger.error("Failed to fetch job matching", error=str(e), exc_info=True)
        return build_default_response("error")


def rest_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    API Gateway proxy handler for job-matching lookups.

    The link id comes from the Cognito authorizer claims (custom:linkId, then
    the email or username local part), falling back to the `linkId`
    query-string parameter.
    """
    if event.get("httpMethod") == "OPTIONS":
        return build_http_response(200, {}, cors=True)

    logger.set_correlation_id(get_correlation_id(event))
    try:
        claims = get_claims(event)
        link_id = (
            claims.get("custom:linkId")
            or local_part(claims.get("email"))
            or local_part(claims.get("username"))
            or (event.get("queryStringParameters") or {}).get("linkId")
        )
        if not link_id:
            return build_http_response(400, {"message": "Missing linkId parameter"}, cors=True)

        item = get_job_matching(link_id)
        if not item:
            return build_http_response(404, {"message": "No matching data found"}, cors=True)

        return build_http_response(200, item, cors=True)
    except Exception as e:
        logger.error("Failed to fetch job matching", error=str(e), exc_info=True)
        return build_http_response(500, {"message": "Internal server error"}, cors=True)
