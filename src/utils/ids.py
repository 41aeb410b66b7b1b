"""
Identifier utilities for visitor links.

A visitor link id is the shareable key carried in `?visitor=<linkId>`. The
matching Cognito user is named `<linkId>@visitor.temporary.com`.
"""

import re
import secrets
import string
import uuid
from typing import Dict, List, Optional

VISITOR_EMAIL_DOMAIN = "visitor.temporary.com"

LINK_ID_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,64}$")

# Characters that break shells, JSON or URL handling when a password is copied around
PASSWORD_EXCLUDE_CHARS = "\"`'\\${}[]()!?><|&;*"
PASSWORD_LENGTH = 16

# Visitor link items expire (DynamoDB TTL) after this many days
LINK_TTL_DAYS = 15


def generate_link_id() -> str:
    """Generate a new opaque link id."""
    return str(uuid.uuid4())


def is_valid_link_id(value: Optional[str]) -> bool:
    """
    Check that a link id is safe to use as a key and in a cookie.

    Examples:
        >>> is_valid_link_id('296850ee-5f11-4a5f-910a-a6c2dff8f52e')
        True
        >>> is_valid_link_id('a;b')
        False
        >>> is_valid_link_id(None)
        False
    """
    return bool(value) and LINK_ID_PATTERN.match(value or "") is not None


def visitor_username(link_id: str) -> str:
    """Cognito username for a visitor link."""
    return f"{link_id}@{VISITOR_EMAIL_DOMAIN}"


def visitor_user_attributes(link_id: str) -> List[Dict[str, str]]:
    """Cognito attributes for a visitor user; custom:linkId becomes a token claim."""
    return [
        {"Name": "email", "Value": visitor_username(link_id)},
        {"Name": "email_verified", "Value": "true"},
        {"Name": "custom:linkId", "Value": link_id},
    ]


def local_part(value: Optional[str]) -> Optional[str]:
    """
    Return the part before '@', or None for empty input.

    Examples:
        >>> local_part('abc@visitor.temporary.com')
        'abc'
        >>> local_part('plain')
        'plain'
    """
    if not value or not isinstance(value, str):
        return None
    return value.split("@", 1)[0] or None


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """
    Generate a password that satisfies the Cognito policy.

    Every character class (lower, upper, digit, symbol) is present at least
    once; symbols in PASSWORD_EXCLUDE_CHARS are never used.
    """
    symbols = "".join(c for c in string.punctuation if c not in PASSWORD_EXCLUDE_CHARS)
    classes = [string.ascii_lowercase, string.ascii_uppercase, string.digits, symbols]
    alphabet = "".join(classes)

    chars = [secrets.choice(group) for group in classes]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
