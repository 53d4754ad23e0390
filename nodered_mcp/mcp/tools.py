"""Node-RED MCP tool surface: 17 tools.

Each method wraps the corresponding ``NodeRedClient`` method and returns a
``ToolResult`` envelope.  Argument extraction (JSON-string flow payloads,
scope/id rules) happens here; everything else is the client's job.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from nodered_mcp.client import NodeRedClient, NodeRedError, RemoteError, SchemaError, validate_flow
from nodered_mcp.client.schemas import FlowUpdateRequest, dump, parse_model

logger = logging.getLogger("nodered_mcp.mcp.tools")


@dataclass
class ToolResult:
    """Normalized envelope for every tool execution result.

    ok:      True if the tool completed without error.
    summary: Compact one-line description of the outcome.
    facts:   Small structured key→value extracts (ids, counts).
    data:    Raw JSON-safe payload returned by the runtime.
    error:   Present when ok=False. Dict with keys:
               type:        Error category (RemoteError, TransportError, ...).
               message:     Human-readable summary.
               detail:      Runtime body text or schema location.
               status_code: HTTP status, for RemoteError only.
    """

    ok: bool
    summary: str
    data: Any = None
    error: dict | None = None
    facts: dict = field(default_factory=dict)


def _ok(summary: str, data: Any, **facts: Any) -> ToolResult:
    return ToolResult(ok=True, summary=summary, data=data, error=None, facts=facts)


def _fail(exc: Exception) -> ToolResult:
    msg = str(exc)
    error: dict[str, Any] = {"type": type(exc).__name__, "message": msg, "detail": ""}
    if isinstance(exc, RemoteError):
        error["status_code"] = exc.status_code
        error["detail"] = exc.body_text
    elif isinstance(exc, SchemaError):
        error["detail"] = exc.path
    return ToolResult(ok=False, summary=f"Failed: {msg.splitlines()[0] if msg else error['type']}", error=error)


class InvalidArguments(ValueError):
    pass


def _parse_json_arg(value: str, param: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidArguments(f"Invalid JSON in {param} parameter: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidArguments(f"Invalid JSON in {param} parameter: expected an object")
    return parsed


def _require_id(scope: str, id: str | None) -> None:
    if scope not in ("global", "flow", "node"):
        raise InvalidArguments(f"Invalid scope {scope!r}; expected global, flow or node")
    if scope in ("flow", "node") and not id:
        raise InvalidArguments(f'id is required when scope is "{scope}"')


def _checked_flow(payload: dict[str, Any]) -> FlowUpdateRequest:
    result = validate_flow(payload)
    if not result.valid:
        raise InvalidArguments("Flow validation failed: " + "; ".join(result.errors or []))
    return parse_model(FlowUpdateRequest, payload, what="flow")


class NodeRedMCPTools:
    """17 Node-RED MCP tools returning ``ToolResult`` envelopes."""

    def __init__(self, client: NodeRedClient) -> None:
        self._client = client

    # ==================================================================
    # FLOWS
    # ==================================================================

    async def get_flows(self) -> ToolResult:
        try:
            flows = await self._client.get_flows()
        except NodeRedError as e:
            return _fail(e)
        tabs = sum(1 for item in flows.items if item.type == "tab")
        return _ok(
            f"Listed {len(flows.items)} flow items in {tabs} tabs (rev {flows.revision})",
            dump(flows),
            rev=flows.revision,
        )

    async def create_flow(self, flow: str) -> ToolResult:
        try:
            request = _checked_flow(_parse_json_arg(flow, "flow"))
            reply = await self._client.create_flow(request)
        except (InvalidArguments, NodeRedError) as e:
            return _fail(e)
        return _ok(f"Created flow {reply.id}", dump(reply), flow_id=reply.id)

    async def update_flow(self, flow_id: str, updates: str) -> ToolResult:
        try:
            payload = _parse_json_arg(updates, "updates")
            payload["id"] = flow_id
            request = _checked_flow(payload)
            reply = await self._client.update_flow(flow_id, request)
        except (InvalidArguments, NodeRedError) as e:
            return _fail(e)
        return _ok(f"Updated flow {reply.id}", dump(reply), flow_id=reply.id)

    async def validate_flow(self, flow: str) -> ToolResult:
        try:
            payload = json.loads(flow)
        except (json.JSONDecodeError, TypeError) as e:
            data = {"valid": False, "errors": [f"Invalid JSON: {e}"]}
            return _ok("Flow payload is not valid JSON", data, valid=False)
        result = validate_flow(payload)
        if result.valid:
            return _ok("Flow is valid", result.as_dict(), valid=True)
        return _ok(f"Flow has {len(result.errors or [])} problem(s)", result.as_dict(), valid=False)

    async def delete_flow(self, flow_id: str) -> ToolResult:
        try:
            await self._client.delete_flow(flow_id)
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Deleted flow {flow_id}", {"deleted": flow_id})

    # ==================================================================
    # RUNTIME STATE
    # ==================================================================

    async def get_flow_state(self) -> ToolResult:
        try:
            state = await self._client.get_flow_state()
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Flows are {'running' if state.state == 'start' else 'stopped'}", dump(state))

    async def set_flow_state(self, state: str) -> ToolResult:
        if state not in ("start", "stop"):
            return _fail(InvalidArguments(f"Invalid state {state!r}; expected 'start' or 'stop'"))
        try:
            result = await self._client.set_flow_state(state)
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Flow state set to {result.state}", dump(result))

    # ==================================================================
    # CONTEXT
    # ==================================================================

    async def get_context(
        self,
        scope: str,
        id: str | None = None,
        key: str | None = None,
        store: str | None = None,
    ) -> ToolResult:
        try:
            _require_id(scope, id)
            data = await self._client.get_context(scope, id, key, store)
        except (ValueError, NodeRedError) as e:
            return _fail(e)
        target = f"{scope}/{id}" if scope != "global" else scope
        what = f"key '{key}'" if key else "all keys"
        return _ok(f"Read {what} from {target} context", data)

    async def delete_context(
        self,
        scope: str,
        key: str,
        id: str | None = None,
        store: str | None = None,
    ) -> ToolResult:
        try:
            _require_id(scope, id)
            await self._client.delete_context(scope, id, key, store)
        except (ValueError, NodeRedError) as e:
            return _fail(e)
        message = f'Deleted context key "{key}" from {scope} scope'
        return _ok(message, {"success": True, "message": message})

    # ==================================================================
    # INJECT / DEBUG
    # ==================================================================

    async def trigger_inject(self, node_id: str) -> ToolResult:
        try:
            await self._client.trigger_inject(node_id)
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Triggered inject node {node_id}", {"nodeId": node_id, "triggered": True})

    async def set_debug_state(self, node_id: str, enabled: bool) -> ToolResult:
        try:
            await self._client.set_debug_node_state(node_id, enabled)
        except NodeRedError as e:
            return _fail(e)
        verb = "Enabled" if enabled else "Disabled"
        return _ok(f"{verb} debug node {node_id}", {"nodeId": node_id, "enabled": enabled})

    # ==================================================================
    # NODE MODULES
    # ==================================================================

    async def get_nodes(self) -> ToolResult:
        try:
            modules = await self._client.get_nodes()
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Listed {len(modules)} node modules", dump(modules))

    async def install_node(self, module: str) -> ToolResult:
        try:
            result = await self._client.install_node(module)
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Installed {result.name}@{result.version}", dump(result), module=result.name)

    async def set_node_module_state(self, module: str, enabled: bool) -> ToolResult:
        try:
            result = await self._client.set_node_module_state(module, enabled)
        except NodeRedError as e:
            return _fail(e)
        verb = "Enabled" if enabled else "Disabled"
        return _ok(f"{verb} module {result.name}", dump(result), module=result.name)

    async def remove_node_module(self, module: str) -> ToolResult:
        try:
            await self._client.remove_node_module(module)
        except NodeRedError as e:
            return _fail(e)
        return _ok(f"Removed module {module}", {"success": True, "module": module})

    # ==================================================================
    # SETTINGS / DIAGNOSTICS
    # ==================================================================

    async def get_settings(self) -> ToolResult:
        try:
            settings = await self._client.get_settings()
        except NodeRedError as e:
            return _fail(e)
        version = settings.version or "?"
        return _ok(f"Fetched runtime settings (Node-RED {version})", dump(settings), version=version)

    async def get_diagnostics(self) -> ToolResult:
        try:
            report = await self._client.get_diagnostics()
        except NodeRedError as e:
            return _fail(e)
        return _ok("Fetched runtime diagnostics", dump(report))
