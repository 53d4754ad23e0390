"""Error taxonomy for the Node-RED client.

Every exception keeps the runtime's own status code and body text so the
caller can render Node-RED's message verbatim.
"""

from __future__ import annotations


class NodeRedError(Exception):
    """Base class for every error raised by the client."""


class ConfigError(NodeRedError):
    """The connection string or environment is unusable."""


class TransportError(NodeRedError):
    """The runtime could not be reached (connect, read or timeout failure)."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"{method} {path} failed: {reason}")


class RemoteError(NodeRedError):
    """The runtime answered with a status outside the operation's success set."""

    def __init__(self, action: str, status_code: int, body_text: str) -> None:
        self.action = action
        self.status_code = status_code
        self.body_text = body_text
        super().__init__(f"Failed to {action}: {status_code}\n{body_text}")


class SchemaError(NodeRedError):
    """A successful response (or a request payload) has the wrong shape."""

    def __init__(self, path: str, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        where = path or "<root>"
        super().__init__(f"Invalid value at {where}: expected {expected}, got {actual}")
