"""
GraphQL client for the portfolio AppSync API.

Wraps the site's queries the way the frontend hooks use them: each call
picks its auth header from the route type and the visitor's cookies.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from . import queries
from .auth import AuthState, get_auth_headers, get_environment

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class GraphQLError(Exception):
    """Raised when AppSync returns errors or an unusable response."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotAuthenticatedError(GraphQLError):
    """Raised when a call needs a visitor access token and none is present."""


class PortfolioClient:
    """Thin requests-based GraphQL client."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        environment: Optional[str] = None,
        auth_state: Optional[AuthState] = None,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        if not url:
            raise ValueError("AppSync URL is required")
        self.url = url
        self.api_key = api_key
        self.environment = environment or get_environment()
        self.auth_state = auth_state or AuthState()
        self.session = session or requests.Session()
        self.timeout = timeout
        if self.environment == "local" and not api_key:
            logger.warning("AppSync API key is not set but required for local development")

    def auth_headers(self, route_type: str) -> Dict[str, str]:
        return get_auth_headers(self.environment, route_type, self.api_key, self.auth_state)

    @property
    def is_authenticated(self) -> bool:
        return self.auth_state.is_authenticated(self.environment)

    def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        route_type: str = "public",
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        POST a GraphQL document and return its data.

        Raises:
            GraphQLError: On HTTP failures or when the response carries errors
        """
        request_headers = {"Content-Type": "application/json", **(headers or self.auth_headers(route_type))}
        try:
            response = self.session.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                headers=request_headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise GraphQLError(f"GraphQL request failed: {e}") from e
        except ValueError as e:
            raise GraphQLError("GraphQL response was not valid JSON") from e

        if payload.get("errors"):
            messages = "; ".join(str(error.get("message")) for error in payload["errors"])
            raise GraphQLError(messages, payload["errors"])
        return dict(payload.get("data") or {})

    def get_developer(self, developer_id: str) -> Optional[Dict[str, Any]]:
        return self.execute(queries.GET_DEVELOPER, {"id": developer_id}).get("getDeveloper")

    def list_developers(self) -> List[Dict[str, Any]]:
        return list(self.execute(queries.LIST_DEVELOPERS).get("listDevelopers") or [])

    def get_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        return self.execute(queries.GET_PROJECT, {"id": project_id}).get("getProject")

    def get_developer_with_projects(self, developer_id: str) -> Optional[Dict[str, Any]]:
        return self.execute(queries.GET_DEVELOPER_WITH_PROJECTS, {"id": developer_id}).get("getDeveloper")

    def get_advocate_greeting(self) -> Optional[Dict[str, Any]]:
        """Greeting for the current visitor; skipped (None) when not authenticated."""
        if not self.is_authenticated:
            return None
        return self.execute(queries.GET_ADVOCATE_GREETING, route_type="protected").get("getAdvocateGreeting")

    def get_developer_with_advocate_greeting(self, developer_id: str) -> Dict[str, Any]:
        return self.execute(
            queries.GET_DEVELOPER_WITH_ADVOCATE_GREETING, {"id": developer_id}, route_type="protected"
        )

    def get_job_matching(self) -> Optional[Dict[str, Any]]:
        if not self.is_authenticated:
            return None
        return self.execute(queries.GET_JOB_MATCHING, route_type="protected").get("getJobMatching")

    def _bearer_headers(self) -> Dict[str, str]:
        if not self.auth_state.access_token:
            raise NotAuthenticatedError("Authentication token not available")
        return {"Authorization": f"Bearer {self.auth_state.access_token}"}

    def ask_question(self, question: str) -> Dict[str, Any]:
        """Ask the AI advocate a question. Always sent with the visitor's token."""
        data = self.execute(queries.ASK_AI_QUESTION, {"question": question}, headers=self._bearer_headers())
        return dict(data.get("askAIQuestion") or {})

    def reset_conversation(self) -> bool:
        data = self.execute(queries.RESET_CONVERSATION, headers=self._bearer_headers())
        return bool(data.get("resetConversation"))
