"""Node-RED admin HTTP client."""

from nodered_mcp.client.config import Connection, Settings, resolve_connection
from nodered_mcp.client.errors import ConfigError, NodeRedError, RemoteError, SchemaError, TransportError
from nodered_mcp.client.nodered_client import NodeRedClient
from nodered_mcp.client.validation import ValidationResult, validate_flow

__all__ = [
    "ConfigError",
    "Connection",
    "NodeRedClient",
    "NodeRedError",
    "RemoteError",
    "SchemaError",
    "Settings",
    "TransportError",
    "ValidationResult",
    "resolve_connection",
    "validate_flow",
]
