"""
Lambda@Edge visitor-context interceptor.

Attached to the CloudFront distribution on viewer-request and viewer-response.

viewer-request: when the URL carries `?visitor=<linkId>`, the matching visitor
link is looked up, the temporary Cognito user is signed in, and the tokens plus
the visitor attribution are stashed on the request as `x-*` headers.

viewer-response: the stashed headers are turned into `Set-Cookie` headers so
the frontend can call AppSync as the visitor.

The function never raises: any failure returns the event's request/response
untouched so the site keeps serving.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, quote

import boto3

# Handle both Lambda (absolute) and unit test (relative) imports
try:  # pragma: no cover
    from utils.dynamodb import get_table  # type: ignore[import-not-found]
    from utils.ids import is_valid_link_id, visitor_username  # type: ignore[import-not-found]
    from utils.logging import get_logger  # type: ignore[import-not-found]
    from utils.ssm import EDGE_REGION, MAIN_REGION, build_ssm_path, get_parameters  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover
    from ..utils.dynamodb import get_table
    from ..utils.ids import is_valid_link_id, visitor_username
    from ..utils.logging import get_logger
    from ..utils.ssm import EDGE_REGION, MAIN_REGION, build_ssm_path, get_parameters

logger = get_logger(__name__)

STATIC_PREFIXES = ("/_next/",)
STATIC_EXTENSIONS = (".js", ".css", ".png", ".ico", ".svg", ".woff", ".woff2")

DEFAULT_COMPANY = "Demo Company"
DEFAULT_NAME = "Visitor"
DEFAULT_CONTEXT = "portfolio review"

COOKIE_ATTRIBUTES = "Path=/; Secure; SameSite=Strict"

# Container-lifetime cache, keyed by stage
_config_cache: Dict[str, Dict[str, str]] = {}


def is_static_asset(uri: str) -> bool:
    """
    Check whether a URI points at a static asset that needs no visitor handling.

    Examples:
        >>> is_static_asset('/_next/static/chunk.js')
        True
        >>> is_static_asset('/favicon.ico')
        True
        >>> is_static_asset('/projects')
        False
    """
    return uri.startswith(STATIC_PREFIXES) or uri.endswith(STATIC_EXTENSIONS)


def get_stage(context: Any) -> str:
    """Derive the stage from the function name suffix (edge functions get no env vars)."""
    function_name = getattr(context, "function_name", "") or ""
    suffix = function_name.rsplit("-", 1)[-1]
    return suffix if suffix in ("dev", "prod") else "dev"


def load_config(stage: str) -> Dict[str, str]:
    """
    Load Cognito and table configuration from SSM, cached per container.

    Raises:
        ValueError: If a required parameter is missing
    """
    if stage in _config_cache:
        return _config_cache[stage]

    config = get_parameters(
        [build_ssm_path(stage, "COGNITO_CLIENT_ID"), build_ssm_path(stage, "COGNITO_USER_POOL_ID")],
        region_name=MAIN_REGION,
    )
    config.update(get_parameters([build_ssm_path(stage, "VISITOR_TABLE_NAME")], region_name=EDGE_REGION))

    missing = [
        name
        for name in ("COGNITO_CLIENT_ID", "COGNITO_USER_POOL_ID", "VISITOR_TABLE_NAME")
        if not config.get(name)
    ]
    if missing:
        raise ValueError(f"Missing SSM parameters for stage {stage}: {', '.join(missing)}")

    _config_cache[stage] = config
    return config


def clear_config_cache() -> None:
    """Forget cached configuration (used by tests)."""
    _config_cache.clear()


def get_visitor_param(request: Dict[str, Any]) -> Optional[str]:
    values = parse_qs(request.get("querystring") or "").get("visitor")
    return values[0] if values else None


def get_link_data(table_name: str, link_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a visitor link; only links that carry a password are usable."""
    item = get_table(table_name, EDGE_REGION).get_item(Key={"linkId": link_id}).get("Item")
    if not item or not item.get("password"):
        return None
    return item


def authenticate_visitor(config: Dict[str, str], link_id: str, password: str) -> Dict[str, Any]:
    """Sign in the temporary visitor user and return the AuthenticationResult."""
    cognito = boto3.client("cognito-idp", region_name=MAIN_REGION)
    response = cognito.admin_initiate_auth(
        UserPoolId=config["COGNITO_USER_POOL_ID"],
        ClientId=config["COGNITO_CLIENT_ID"],
        AuthFlow="ADMIN_USER_PASSWORD_AUTH",
        AuthParameters={"USERNAME": visitor_username(link_id), "PASSWORD": password},
    )
    result: Dict[str, Any] = response["AuthenticationResult"]
    return result


def get_visitor_context(link_data: Dict[str, Any]) -> Dict[str, str]:
    """Attribution triple for a link, with defaults for missing fields."""
    return {
        "company": link_data.get("companyName") or DEFAULT_COMPANY,
        "name": link_data.get("recruiterName") or link_data.get("contactName") or DEFAULT_NAME,
        "context": link_data.get("context") or DEFAULT_CONTEXT,
    }


def _set_header(headers: Dict[str, List[Dict[str, str]]], key: str, value: str) -> None:
    headers[key.lower()] = [{"key": key, "value": value}]


def _get_header(headers: Dict[str, List[Dict[str, str]]], key: str) -> Optional[str]:
    values = headers.get(key.lower()) or []
    return values[0].get("value") if values else None


def _cookie(name: str, value: str, max_age: Any) -> Dict[str, str]:
    return {
        "key": "Set-Cookie",
        "value": f"{name}={quote(str(value), safe='')}; {COOKIE_ATTRIBUTES}; Max-Age={max_age}",
    }


def handle_viewer_request(request: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Authenticate a visitor link and stash tokens and attribution on the request."""
    if is_static_asset(request.get("uri", "")):
        return request

    link_id = get_visitor_param(request)
    if not link_id:
        return request
    if not is_valid_link_id(link_id):
        logger.warning("Ignoring malformed visitor parameter")
        return request

    config = load_config(get_stage(context))
    link_data = get_link_data(config["VISITOR_TABLE_NAME"], link_id)
    if not link_data:
        logger.info("No usable visitor link", link_id=link_id)
        return request

    auth_result = authenticate_visitor(config, link_id, link_data["password"])
    tokens = {
        "IdToken": auth_result.get("IdToken"),
        "AccessToken": auth_result.get("AccessToken"),
        "ExpiresIn": auth_result.get("ExpiresIn", 3600),
    }
    visitor = get_visitor_context(link_data)

    headers = request.setdefault("headers", {})
    _set_header(headers, "X-Auth-Tokens", json.dumps(tokens))
    _set_header(headers, "X-Link-Id", link_id)
    _set_header(headers, "X-Visitor-Company", visitor["company"])
    _set_header(headers, "X-Visitor-Name", visitor["name"])
    _set_header(headers, "X-Visitor-Context", visitor["context"])

    logger.info("Visitor authenticated", link_id=link_id)
    return request


def handle_viewer_response(request: Dict[str, Any], response: Dict[str, Any]) -> Dict[str, Any]:
    """Turn the stashed request headers into Set-Cookie headers."""
    if is_static_asset(request.get("uri", "")):
        return response

    request_headers = request.get("headers") or {}
    raw_tokens = _get_header(request_headers, "X-Auth-Tokens")
    if not raw_tokens:
        return response

    tokens = json.loads(raw_tokens)
    max_age = tokens.get("ExpiresIn", 3600)
    cookies: List[Dict[str, str]] = []
    for name in ("IdToken", "AccessToken"):
        if tokens.get(name):
            cookies.append(_cookie(name, tokens[name], max_age))

    link_id = _get_header(request_headers, "X-Link-Id")
    if link_id:
        cookies.append(_cookie("LinkId", link_id, max_age))
        cookies.append(
            _cookie("visitor_company", _get_header(request_headers, "X-Visitor-Company") or DEFAULT_COMPANY, max_age)
        )
        cookies.append(
            _cookie("visitor_name", _get_header(request_headers, "X-Visitor-Name") or DEFAULT_NAME, max_age)
        )
        cookies.append(
            _cookie("visitor_context", _get_header(request_headers, "X-Visitor-Context") or DEFAULT_CONTEXT, max_age)
        )

    if cookies:
        response.setdefault("headers", {}).setdefault("set-cookie", []).extend(cookies)
    return response


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    CloudFront entry point for both viewer-request and viewer-response.

    Args:
        event: CloudFront Lambda@Edge event (Records[0].cf)
        context: Lambda context; its function name carries the stage

    Returns:
        The (possibly modified) request or response
    """
    cf = event["Records"][0]["cf"]
    event_type = (cf.get("config") or {}).get("eventType", "viewer-request")
    request: Dict[str, Any] = cf["request"]

    if event_type.endswith("response"):
        response: Dict[str, Any] = cf["response"]
        try:
            return handle_viewer_response(request, response)
        except Exception as e:
            logger.error("Failed to set visitor cookies", error=str(e), exc_info=True)
            return cf["response"]

    try:
        return handle_viewer_request(request, context)
    except Exception as e:
        logger.error("Failed to resolve visitor link", error=str(e), exc_info=True)
        return cf["request"]
