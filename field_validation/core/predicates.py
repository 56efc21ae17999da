"""
Rule predicates — pure boolean checks applied to a single field value.

Every predicate is total: a wrong-typed or unparseable value evaluates to
False (or True for is_empty) instead of raising. Regex-based checks run
against the value's text form (see to_text), so booleans and numbers are
checked the same way a form submission would present them.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Sequence
from urllib.parse import urlsplit


class _Missing:
    """Marker for a key absent from the input record."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_ALPHA_RE = re.compile(r"[a-zA-Z]+")
_ALPHANUMERIC_RE = re.compile(r"[a-zA-Z0-9]+")
_PASSWORD_RE = re.compile(r"(?=.*[A-Z])(?=.*[a-z])(?=.*[0-9]).{6,}")
# float() also takes "1_000" and "nan"; form input never means either.
_NUMBER_RE = re.compile(r"\s*[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|Infinity)\s*")


def to_text(value: Any) -> str:
    """Render a scalar the way it would arrive in a submitted form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text_or_none(value: Any) -> Optional[str]:
    """to_text for predicates: None when the value has no usable text form."""
    try:
        return to_text(value)
    except (ValueError, TypeError):
        # e.g. ints beyond sys.get_int_max_str_digits()
        return None


def _fullmatch(regex: re.Pattern, value: Any) -> bool:
    text = _text_or_none(value)
    return text is not None and regex.fullmatch(text) is not None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_empty(value: Any) -> bool:
    return value is MISSING or value is None or (isinstance(value, str) and value == "")


def is_email(value: Any) -> bool:
    return _fullmatch(_EMAIL_RE, value)


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return not math.isnan(value)
    if not isinstance(value, str) or _NUMBER_RE.fullmatch(value) is None:
        return False
    return not math.isnan(float(value))


def is_alpha(value: Any) -> bool:
    return _fullmatch(_ALPHA_RE, value)


def is_alphanumeric(value: Any) -> bool:
    return _fullmatch(_ALPHANUMERIC_RE, value)


def is_boolean(value: Any) -> bool:
    return value is True or value is False or value in ("true", "false")


def is_iso8601(value: Any) -> bool:
    """True for date objects and strings accepted by datetime.fromisoformat."""
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False
    return True


def is_url(value: Any) -> bool:
    """True for absolute URLs: both a scheme and a host are required."""
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not text or any(ch.isspace() for ch in text):
        return False
    try:
        parts = urlsplit(text)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(parts.scheme and parts.hostname)


def is_length(value: Any, min: Optional[float] = None, max: Optional[float] = None) -> bool:
    text = _text_or_none(value)
    if text is None:
        return False
    length = len(text)
    if min is not None and length < min:
        return False
    if max is not None and length > max:
        return False
    return True


def equals(value: Any, comparison: Any) -> bool:
    """Strict equality: no coercion between strings, numbers and booleans."""
    if _is_number(value) and _is_number(comparison):
        return value == comparison
    if type(value) is not type(comparison):
        return False
    try:
        return bool(value == comparison)
    except (TypeError, ValueError):
        return False


def is_in(value: Any, values: Sequence[Any]) -> bool:
    return any(equals(value, candidate) for candidate in values)


def matches(value: Any, pattern: re.Pattern) -> bool:
    text = _text_or_none(value)
    return text is not None and pattern.search(text) is not None


def is_strong_password(value: Any) -> bool:
    """Uppercase, lowercase and a digit; at least six characters."""
    return _fullmatch(_PASSWORD_RE, value)
