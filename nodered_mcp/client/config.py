"""Configuration for the Node-RED HTTP client."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit, urlunsplit

from nodered_mcp.client.errors import ConfigError

API_VERSION = "v2"


@dataclass(frozen=True)
class Connection:
    """Resolved, immutable connection to one Node-RED runtime.

    ``basic_auth`` is derived once from the URL user-info; the stored
    ``base_url`` never carries credentials.  When both a token and basic
    auth exist only the bearer token is sent.
    """

    base_url: str
    token: str | None = field(default=None, repr=False)
    basic_auth: str | None = field(default=None, repr=False)

    @property
    def credential(self) -> str:
        if self.token:
            return "bearer"
        if self.basic_auth:
            return "basic"
        return "none"

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Content-Type": "application/json",
            "Node-RED-API-Version": API_VERSION,
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        elif self.basic_auth:
            h["Authorization"] = f"Basic {self.basic_auth}"
        return h


def resolve_connection(url: str, token: str | None = None) -> Connection:
    """Build a :class:`Connection` from a connection string and optional token.

    Raises ConfigError when *url* is not an absolute http(s) URL.
    """
    try:
        parts = urlsplit(url.strip())
        # .port raises ValueError on a non-numeric port
        parts.port
    except (AttributeError, ValueError) as e:
        raise ConfigError(f"Invalid Node-RED URL {url!r}: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigError(f"Invalid Node-RED URL {url!r}: expected an absolute http(s) URL")

    basic_auth = None
    netloc = parts.netloc
    if "@" in netloc:
        userinfo, _, netloc = netloc.rpartition("@")
        user, _, password = userinfo.partition(":")
        pair = f"{unquote(user)}:{unquote(password)}"
        basic_auth = base64.b64encode(pair.encode("utf-8")).decode("ascii")

    base_url = urlunsplit((parts.scheme, netloc, parts.path, "", "")).rstrip("/")
    return Connection(base_url=base_url, token=token or None, basic_auth=basic_auth)


@dataclass(frozen=True)
class Settings:
    """Immutable settings loaded from environment variables."""

    url: str
    token: str | None = field(default=None, repr=False)
    timeout: float | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        url = os.getenv("NODE_RED_URL", "").strip()
        if not url:
            raise ConfigError("NODE_RED_URL environment variable is required")
        token = os.getenv("NODE_RED_TOKEN") or None
        raw_timeout = os.getenv("NODE_RED_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError as e:
            raise ConfigError(f"NODE_RED_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from e
        log_level = os.getenv("NODE_RED_MCP_LOG_LEVEL", "WARNING").upper()
        return cls(url=url, token=token, timeout=timeout, log_level=log_level)

    @property
    def connection(self) -> Connection:
        return resolve_connection(self.url, self.token)
