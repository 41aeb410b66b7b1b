"""
Helpers for AppSync resolver events.

Reads field names, arguments and Cognito claims, and derives the visitor
link id from those claims.
"""

from typing import Any, Dict, Optional

from .ids import local_part


def get_field_name(event: Dict[str, Any]) -> Optional[str]:
    """Return the GraphQL field being resolved."""
    info: Dict[str, Any] = event.get("info") or {}
    return info.get("fieldName")


def get_argument(event: Dict[str, Any], name: str, default: Any = None) -> Any:
    """
    Extract an argument from the event.

    Args:
        event: AppSync event
        name: Argument name
        default: Default value if not present

    Returns:
        Argument value or default
    """
    return (event.get("arguments") or {}).get(name, default)


def get_claims(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract Cognito claims from an AppSync or API Gateway event.

    Looks in identity.claims first, then requestContext.identity.claims and
    requestContext.authorizer.claims.
    """
    identity = event.get("identity") or {}
    if identity.get("claims"):
        return dict(identity["claims"])

    request_context = event.get("requestContext") or {}
    for section in ("identity", "authorizer"):
        claims = (request_context.get(section) or {}).get("claims")
        if claims:
            return dict(claims)
    return {}


def get_link_id_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    """
    Derive the visitor link id from Cognito claims.

    Order: custom:linkId, sub, email local part, username local part.
    """
    link_id = claims.get("custom:linkId") or claims.get("sub")
    if link_id:
        return str(link_id)
    return local_part(claims.get("email")) or local_part(claims.get("username"))


def get_link_id(event: Dict[str, Any]) -> Optional[str]:
    """
    Resolve the link id for a resolver event.

    An explicit `linkId` argument wins over anything derived from claims.
    """
    explicit = get_argument(event, "linkId")
    if explicit:
        return str(explicit)
    return get_link_id_from_claims(get_claims(event))
