#!/usr/bin/env python3
"""
predicates.py
-------------
Builtin predicates available to rule sets.

Every predicate takes the value under test as its first positional argument,
followed by the rule options, and returns a bool. Rule names follow the
camelCase names used in schema and settings files (``isLength``,
``notContains``...), so they are kept as dictionary keys rather than
function names.

Values are coerced to text the way a form validator sees them: None becomes
"", booleans become "true"/"false" and sequences are joined with commas.
The two exceptions are ``empty`` and ``notContains``, which look at the
value itself so they also work on containers.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from collections.abc import Mapping, Sized
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlsplit


Predicate = Callable[..., bool]

INT_RE = re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*))$")
FLOAT_RE = re.compile(r"^(?:[-+]?(?:[0-9]+))?(?:\.[0-9]*)?(?:[eE][+\-]?(?:[0-9]+))?$")
NUMERIC_RE = re.compile(r"^[-+]?[0-9]+$")
ALPHA_RE = re.compile(r"^[A-Z]+$", re.IGNORECASE)
ALPHANUMERIC_RE = re.compile(r"^[0-9A-Z]+$", re.IGNORECASE)
EMAIL_RE = re.compile(
    r"^[A-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?"
    r"(?:\.[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?)+$",
    re.IGNORECASE,
)
HOST_RE = re.compile(
    r"^(?:localhost|(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,}|\d{1,3}(?:\.\d{1,3}){3})$",
    re.IGNORECASE,
)
URL_SCHEMES = ("http", "https", "ftp")
REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def to_text(value: Any) -> str:
    """Coerce a value to the string a form validator would test."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ----- Required builtins -----

def is_int(value: Any) -> bool:
    return bool(INT_RE.match(to_text(value)))


def is_length(value: Any, min_length: int = 0, max_length: Optional[int] = None) -> bool:
    """True if the text length lies within [min_length, max_length]."""
    length = len(to_text(value))
    if length < int(min_length):
        return False
    return max_length is None or length <= int(max_length)


def is_null(value: Any) -> bool:
    return len(to_text(value)) == 0


def is_empty(value: Any) -> bool:
    """
    True for None and for zero-length strings and containers.

    Numbers and booleans are scalars and never count as empty.
    """
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def not_contains(value: Any, needle: Any) -> bool:
    """True if the value does not contain the needle."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return needle not in value
    return to_text(needle) not in to_text(value)


# ----- Form-validator extras -----

def contains(value: Any, needle: Any) -> bool:
    return to_text(needle) in to_text(value)


def equals(value: Any, other: Any) -> bool:
    return to_text(value) == to_text(other)


def is_in(value: Any, options: Any) -> bool:
    """Membership in a list/mapping of options, or substring of a string."""
    text = to_text(value)
    if isinstance(options, Mapping):
        return text in options
    if isinstance(options, (list, tuple, set, frozenset)):
        return text in {to_text(option) for option in options}
    if isinstance(options, str):
        return text in options
    return False


def is_email(value: Any) -> bool:
    text = to_text(value)
    return len(text) <= 254 and bool(EMAIL_RE.match(text))


def is_url(value: Any) -> bool:
    """
    True for http(s)/ftp URLs with a plausible host.

    A missing protocol is accepted (``example.com/path``).
    """
    text = to_text(value).strip()
    if not text or any(ch.isspace() for ch in text) or len(text) > 2083:
        return False
    if "://" not in text:
        text = f"http://{text}"
    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError:
        return False
    if parts.scheme.lower() not in URL_SCHEMES or not parts.hostname:
        return False
    if port is not None and not 0 < port <= 65535:
        return False
    return bool(HOST_RE.match(parts.hostname))


def is_numeric(value: Any) -> bool:
    return bool(NUMERIC_RE.match(to_text(value)))


def is_float(value: Any) -> bool:
    text = to_text(value)
    return text not in ("", ".") and bool(FLOAT_RE.match(text))


def is_alpha(value: Any) -> bool:
    return bool(ALPHA_RE.match(to_text(value)))


def is_alphanumeric(value: Any) -> bool:
    return bool(ALPHANUMERIC_RE.match(to_text(value)))


def is_lowercase(value: Any) -> bool:
    text = to_text(value)
    return text == text.lower()


def is_uppercase(value: Any) -> bool:
    text = to_text(value)
    return text == text.upper()


def matches(value: Any, pattern: str, modifiers: str = "") -> bool:
    """True if the regex pattern is found in the value. Modifiers: i, m, s, x."""
    flags = 0
    for modifier in modifiers:
        flags |= REGEX_FLAGS.get(modifier, 0)
    return re.search(pattern, to_text(value), flags) is not None


BUILTIN_PREDICATES: Dict[str, Predicate] = {
    "isInt": is_int,
    "isLength": is_length,
    "isNull": is_null,
    "empty": is_empty,
    "notContains": not_contains,
    "contains": contains,
    "equals": equals,
    "isIn": is_in,
    "isEmail": is_email,
    "isURL": is_url,
    "isUrl": is_url,
    "isNumeric": is_numeric,
    "isFloat": is_float,
    "isAlpha": is_alpha,
    "isAlphanumeric": is_alphanumeric,
    "isLowercase": is_lowercase,
    "isUppercase": is_uppercase,
    "matches": matches,
}
