"""CORS middleware configuration and its validation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_SCHEMAS: tuple[str, ...] = ("http://", "https://")
EXTENSION_SCHEMAS: tuple[str, ...] = (
    "chrome-extension://",
    "safari-extension://",
    "moz-extension://",
    "ms-browser-extension://",
)
FILE_SCHEMAS: tuple[str, ...] = ("file://",)
WEBSOCKET_SCHEMAS: tuple[str, ...] = ("ws://", "wss://")


class ConfigError(ValueError):
    """Raised when a CORS configuration is inconsistent or malformed."""


@dataclass
class Config:
    """All options of the CORS middleware.

    ``allow_origins`` takes priority over ``allow_origin_func``; a ``"*"``
    entry allows every origin. ``max_age`` is a timedelta or seconds.
    """

    allow_all_origins: bool = False
    allow_origins: list[str] = field(default_factory=list)
    allow_origin_func: Callable[[str], bool] | None = None
    allow_methods: list[str] = field(default_factory=list)
    allow_headers: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    expose_headers: list[str] = field(default_factory=list)
    max_age: timedelta | int | float = timedelta(0)
    allow_wildcard: bool = False
    allow_browser_extensions: bool = False
    allow_web_sockets: bool = False
    allow_files: bool = False

    def add_allow_methods(self, *args: str) -> None:
        """Append custom methods."""
        self.allow_methods.extend(args)

    def add_allow_headers(self, *args: str) -> None:
        """Append custom request headers."""
        self.allow_headers.extend(args)

    def add_expose_headers(self, *args: str) -> None:
        """Append custom exposed headers."""
        self.expose_headers.extend(args)

    def allowed_schemas(self) -> list[str]:
        """Origin schemas permitted by the current flags."""
        schemas = list(DEFAULT_SCHEMAS)
        if self.allow_browser_extensions:
            schemas.extend(EXTENSION_SCHEMAS)
        if self.allow_web_sockets:
            schemas.extend(WEBSOCKET_SCHEMAS)
        if self.allow_files:
            schemas.extend(FILE_SCHEMAS)
        return schemas

    def validate_allowed_schemas(self, origin: str) -> bool:
        """Whether ``origin`` starts with one of the permitted schemas."""
        return origin.startswith(tuple(self.allowed_schemas()))

    def validate(self) -> None:
        """Raise ConfigError if the options contradict each other."""
        if self.allow_all_origins and (self.allow_origin_func is not None or self.allow_origins):
            raise ConfigError(
                "conflict settings: all origins are allowed. "
                "AllowOriginFunc or AllowOrigins is not needed"
            )
        if not self.allow_all_origins and self.allow_origin_func is None and not self.allow_origins:
            raise ConfigError("conflict settings: all origins disabled")
        for origin in self.allow_origins:
            if "*" not in origin and not self.validate_allowed_schemas(origin):
                raise ConfigError(
                    "bad origin: origins must contain '*' or include "
                    + ",".join(self.allowed_schemas())
                )

    def parse_wildcard_rules(self) -> list[tuple[str, str]]:
        """Split wildcard origins into (prefix, suffix) pairs.

        A leading ``*`` yields ``("*", suffix)`` and a trailing one yields
        ``(prefix, "*")`` with the character before the ``*`` dropped.
        """
        if not self.allow_wildcard:
            return []
        rules: list[tuple[str, str]] = []
        for origin in self.allow_origins:
            if "*" not in origin:
                continue
            if origin.count("*") > 1:
                raise ConfigError("only one * is allowed")
            i = origin.index("*")
            if i == 0:
                rules.append(("*", origin[1:]))
            elif i == len(origin) - 1:
                rules.append((origin[: i - 1], "*"))
            else:
                rules.append((origin[:i], origin[i + 1 :]))
        return rules


def default_config() -> Config:
    """A generic configuration; origins must still be chosen."""
    return Config(
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        allow_headers=["Origin", "Content-Length", "Content-Type"],
        allow_credentials=False,
        max_age=timedelta(hours=12),
    )