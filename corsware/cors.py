"""CORS request evaluation and a WSGI middleware that applies it."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from corsware.config import DEFAULT_SCHEMAS, Config, default_config
from corsware.utils import generate_normal_headers, generate_preflight_headers, normalize

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of checking one request.

    ``status`` is set when the request must be answered right away (403 for a
    rejected origin, 204 for an allowed preflight); otherwise the request goes
    on to the application with ``headers`` added to its response.
    """

    headers: dict[str, str] = field(default_factory=dict)
    status: int | None = None

    @property
    def aborted(self) -> bool:
        """Whether the application must not be called."""
        return self.status is not None


class Cors:
    """Origin checks and header sets derived from a validated Config."""

    def __init__(self, config: Config) -> None:
        config.validate()
        if "*" in config.allow_origins:
            config = dataclasses.replace(config, allow_all_origins=True)
        self.allow_all_origins = config.allow_all_origins
        self.allow_credentials = config.allow_credentials
        self.allow_origin_func = config.allow_origin_func
        self.allow_origins = normalize(config.allow_origins) or []
        self.normal_headers = generate_normal_headers(config)
        self.preflight_headers = generate_preflight_headers(config)
        self.wildcard_origins = config.parse_wildcard_rules()

    def validate_wildcard_origin(self, origin: str) -> bool:
        """Whether ``origin`` matches one of the wildcard rules."""
        for prefix, suffix in self.wildcard_origins:
            if prefix == "*" and origin.endswith(suffix):
                return True
            if suffix == "*" and origin.startswith(prefix):
                return True
            if origin.startswith(prefix) and origin.endswith(suffix):
                return True
        return False

    def validate_origin(self, origin: str) -> bool:
        """Whether a cross-origin request from ``origin`` is allowed."""
        if self.allow_all_origins:
            return True
        if origin in self.allow_origins:
            return True
        if self.wildcard_origins and self.validate_wildcard_origin(origin):
            return True
        if self.allow_origin_func is not None:
            return bool(self.allow_origin_func(origin))
        return False

    def evaluate(self, method: str, origin: str, host: str) -> CorsDecision:
        """Decide how to treat a request with the given method, Origin and Host."""
        if not origin:
            return CorsDecision()
        if any(origin == schema + host for schema in DEFAULT_SCHEMAS):
            # Same origin as the server: not a cross-origin request.
            return CorsDecision()
        if not self.validate_origin(origin):
            return CorsDecision(status=HTTPStatus.FORBIDDEN.value)

        preflight = method == "OPTIONS"
        source = self.preflight_headers if preflight else self.normal_headers
        headers = {key: value for key, value in source.items() if value}
        if not self.allow_all_origins:
            headers["Access-Control-Allow-Origin"] = origin
        if preflight:
            return CorsDecision(headers=headers, status=HTTPStatus.NO_CONTENT.value)
        return CorsDecision(headers=headers)


def _status_line(code: int) -> str:
    return f"{code} {HTTPStatus(code).phrase}"


class CorsMiddleware:
    """WSGI middleware that answers or annotates cross-origin requests."""

    def __init__(self, app: WSGIApp, config: Config) -> None:
        self.app = app
        self.cors = Cors(config)

    def __call__(self, environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        decision = self.cors.evaluate(
            environ.get("REQUEST_METHOD", "GET"),
            environ.get("HTTP_ORIGIN", ""),
            environ.get("HTTP_HOST", ""),
        )
        if decision.aborted:
            start_response(_status_line(decision.status), list(decision.headers.items()))
            return [b""]
        if not decision.headers:
            return self.app(environ, start_response)

        def _start(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> Any:
            # Headers the application sets itself take precedence.
            present = {name.lower() for name, _ in headers}
            extra = [(k, v) for k, v in decision.headers.items() if k.lower() not in present]
            combined = list(headers) + extra
            if exc_info is None:
                return start_response(status, combined)
            return start_response(status, combined, exc_info)

        return self.app(environ, _start)


def new(app: WSGIApp, config: Config) -> CorsMiddleware:
    """Wrap ``app`` with CORS handling for ``config``; raises ConfigError if invalid."""
    return CorsMiddleware(app, config)


def default(app: WSGIApp) -> CorsMiddleware:
    """Wrap ``app`` with the default configuration, allowing every origin."""
    config = default_config()
    config.allow_all_origins = True
    return CorsMiddleware(app, config)