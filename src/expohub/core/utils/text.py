"""Text processing utilities."""

import re
import secrets

from expohub.core.constants import COUPON_PREFIX_MAX_LENGTH


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase key to snake_case.

    Examples:
        >>> to_snake_case("orgName")
        'org_name'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def code_prefix(value: str | None, default: str, max_length: int = COUPON_PREFIX_MAX_LENGTH) -> str:
    """Build an upper-case alphanumeric prefix for generated codes.

    Examples:
        >>> code_prefix("Custom", "CUSTOM")
        'CUSTOM'
        >>> code_prefix("--", "CUSTOM")
        'CUSTOM'
    """
    prefix = re.sub(r"[^A-Z0-9]", "", (value or "").upper())[:max_length]
    return prefix or default


def random_code(alphabet: str, length: int) -> str:
    """Draw ``length`` characters from ``alphabet`` using a CSPRNG."""
    return "".join(secrets.choice(alphabet) for _ in range(length))


def digits_only(value: str) -> str:
    """Strip everything but digits, e.g. ``+91 98480-22338`` -> ``919848022338``."""
    return re.sub(r"\D", "", value)
