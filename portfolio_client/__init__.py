"""Python client for the portfolio GraphQL API."""

from .auth import COOKIE_POLL_INTERVAL_SECONDS, AuthState, CookieWatcher
from .graphql import GraphQLError, NotAuthenticatedError, PortfolioClient

__all__ = [
    "COOKIE_POLL_INTERVAL_SECONDS",
    "AuthState",
    "CookieWatcher",
    "GraphQLError",
    "NotAuthenticatedError",
    "PortfolioClient",
]
