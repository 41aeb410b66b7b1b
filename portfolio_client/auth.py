"""
Visitor authentication state for GraphQL calls.

The edge function drops readable cookies (AccessToken, IdToken, LinkId and
visitor_*) on the visitor's first request. This module reads them back and
decides which AppSync auth header each request carries.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

Environment = Literal["local", "dev", "prod"]
RouteType = Literal["public", "protected"]

COOKIE_POLL_INTERVAL_SECONDS = 5


def get_environment() -> str:
    """Deployment environment; anything unset is treated as local development."""
    return os.getenv("PORTFOLIO_ENVIRONMENT", "local")


def parse_cookies(header: Optional[str]) -> Dict[str, str]:
    """
    Parse a Cookie header into a dict, URL-decoding values.

    Examples:
        >>> parse_cookies('AccessToken=abc; visitor_company=Acme%20Corp')
        {'AccessToken': 'abc', 'visitor_company': 'Acme Corp'}
        >>> parse_cookies(None)
        {}
    """
    cookies: Dict[str, str] = {}
    for part in (header or "").split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            cookies[name] = unquote(value)
    return cookies


@dataclass(frozen=True)
class AuthState:
    """Tokens and visitor attribution read from cookies."""

    access_token: Optional[str] = None
    id_token: Optional[str] = None
    link_id: Optional[str] = None
    visitor_company: Optional[str] = None
    visitor_name: Optional[str] = None
    visitor_context: Optional[str] = None
    visitor_param: Optional[str] = None

    @classmethod
    def from_cookie_header(cls, header: Optional[str], visitor_param: Optional[str] = None) -> "AuthState":
        cookies = parse_cookies(header)
        return cls(
            access_token=cookies.get("AccessToken") or None,
            id_token=cookies.get("IdToken") or None,
            link_id=cookies.get("LinkId") or None,
            visitor_company=cookies.get("visitor_company") or None,
            visitor_name=cookies.get("visitor_name") or None,
            visitor_context=cookies.get("visitor_context") or None,
            visitor_param=visitor_param,
        )

    def is_authenticated(self, environment: str) -> bool:
        """Local development trusts the ?visitor= parameter; deployed stages need a token."""
        if environment == "local":
            return bool(self.visitor_param)
        return bool(self.access_token)


def get_auth_headers(environment: str, route_type: str, api_key: str, state: AuthState) -> Dict[str, str]:
    """
    Headers for one GraphQL request.

    Local development and public routes use the API key. Protected routes use
    the visitor's access token and fall back to the API key without one.
    """
    if environment == "local" or route_type == "public":
        return {"x-api-key": api_key}
    if state.access_token:
        return {"Authorization": f"Bearer {state.access_token}"}
    return {"x-api-key": api_key}


class CookieWatcher:
    """
    Re-reads cookies and reports when the tokens change.

    The edge function can refresh cookies at any time, so long-running clients
    poll every COOKIE_POLL_INTERVAL_SECONDS.
    """

    def __init__(
        self,
        read_cookie_header: Callable[[], Optional[str]],
        on_change: Optional[Callable[[AuthState], None]] = None,
        visitor_param: Optional[str] = None,
        interval: float = COOKIE_POLL_INTERVAL_SECONDS,
    ):
        self.read_cookie_header = read_cookie_header
        self.on_change = on_change
        self.visitor_param = visitor_param
        self.interval = interval
        self.state = AuthState.from_cookie_header(read_cookie_header(), visitor_param)

    def poll(self) -> bool:
        """Refresh the state. Returns True when either token changed."""
        current = AuthState.from_cookie_header(self.read_cookie_header(), self.visitor_param)
        changed = (current.access_token, current.id_token) != (self.state.access_token, self.state.id_token)
        self.state = current
        if changed:
            logger.debug("Auth cookies changed")
            if self.on_change:
                self.on_change(current)
        return changed

    def watch(self, stop: threading.Event) -> None:
        """Poll until `stop` is set."""
        while not stop.wait(self.interval):
            self.poll()
