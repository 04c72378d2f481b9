"""Helpers that normalise configuration values and build CORS header sets."""

from __future__ import annotations

import string
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any

_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def normalize(values: Iterable[str] | None) -> list[str] | None:
    """Strip, lower-case and de-duplicate values, keeping first-seen order."""
    if values is None:
        return None
    seen: set[str] = set()
    normalized: list[str] = []
    for value in values:
        value = value.strip().lower()
        if value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


def convert(values: Iterable[str], converter: Callable[[str], str]) -> list[str]:
    """Apply ``converter`` to every value."""
    return [converter(value) for value in values]


def normalize_header_key(s: str) -> str:
    """Canonicalise a header name: ``x-user-id`` becomes ``X-User-Id``.

    Only ASCII letters change case; every letter that follows a dash is
    upper-cased and every other letter after the first is lower-cased.
    """
    if not s:
        return ""
    out = [s[0].translate(_TO_UPPER)]
    rest = iter(s[1:])
    for ch in rest:
        if ch == "-":
            out.append(ch)
            following = next(rest, None)
            if following is not None:
                out.append(following.translate(_TO_UPPER))
            continue
        out.append(ch.translate(_TO_LOWER))
    return "".join(out)


def _max_age_seconds(max_age: Any) -> int:
    if isinstance(max_age, timedelta):
        return max_age // timedelta(seconds=1)
    return int(max_age)


def _origin_headers(config: Any, headers: dict[str, str]) -> None:
    if config.allow_all_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    else:
        headers["Vary"] = "Origin"


def generate_normal_headers(config: Any) -> dict[str, str]:
    """Headers added to an allowed, non-preflight cross-origin response."""
    headers: dict[str, str] = {}
    if config.allow_credentials:
        headers["Access-Control-Allow-Credentials"] = "true"
    if config.expose_headers:
        exposed = convert(normalize(config.expose_headers), normalize_header_key)
        headers["Access-Control-Expose-Headers"] = ",".join(exposed)
    _origin_headers(config, headers)
    return headers


def generate_preflight_headers(config: Any) -> dict[str, str]:
    """Headers added to an allowed preflight (OPTIONS) response."""
    headers: dict[str, str] = {}
    if config.allow_credentials:
        headers["Access-Control-Allow-Credentials"] = "true"
    if config.allow_methods:
        methods = convert(normalize(config.allow_methods), str.upper)
        headers["Access-Control-Allow-Methods"] = ",".join(methods)
    if config.allow_headers:
        allowed = convert(normalize(config.allow_headers), normalize_header_key)
        headers["Access-Control-Allow-Headers"] = ",".join(allowed)
    seconds = _max_age_seconds(config.max_age)
    if seconds > 0 or (isinstance(config.max_age, timedelta) and config.max_age > timedelta(0)):
        headers["Access-Control-Max-Age"] = str(seconds)
    # Vary is always set when origins are restricted, so caches key on Origin.
    _origin_headers(config, headers)
    return headers