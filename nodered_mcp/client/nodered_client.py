"""Async Node-RED admin API client using httpx."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from nodered_mcp.client.config import Connection, Settings
from nodered_mcp.client.errors import RemoteError, SchemaError, TransportError
from nodered_mcp.client.schemas import (
    NODE_MODULE_LIST,
    FlowIdReply,
    FlowRuntimeState,
    FlowSet,
    FlowUpdateRequest,
    NodeModule,
    RuntimeDiagnostics,
    RuntimeSettings,
    dump,
    parse_model,
)

logger = logging.getLogger("nodered_mcp.client")

CONTEXT_SCOPES: frozenset[str] = frozenset({"global", "flow", "node"})
FLOW_STATES: frozenset[str] = frozenset({"start", "stop"})
# Scoped modules are routed as /nodes/@scope/name.
_MODULE_SAFE = "@/"


def _seg(value: str, safe: str = "") -> str:
    """Percent-encode one path segment so ids and keys cannot add segments or a query."""
    return quote(value, safe=safe)


@dataclass(frozen=True)
class Endpoint:
    """Success policy for one logical operation.

    body:
        ``"json"``   : decode the body as JSON.
        ``"none"``   : ignore the body.
        ``"json|id"``: decode on 200; on 204 the body is skipped and the
                        caller synthesizes ``{id}``.
    """

    action: str
    success: frozenset[int]
    body: str = "json"


def _ep(action: str, *codes: int, body: str = "json") -> Endpoint:
    return Endpoint(action=action, success=frozenset(codes), body=body)


ENDPOINTS: dict[str, Endpoint] = {
    "get_flows": _ep("get flows", 200),
    "create_flow": _ep("create flow", 200, 204),
    "update_flow": _ep("update flow", 200, 204, body="json|id"),
    "delete_flow": _ep("delete flow", 204, body="none"),
    "get_flow_state": _ep("get flow state", 200),
    "set_flow_state": _ep("set flow state", 200),
    "get_settings": _ep("get settings", 200),
    "get_diagnostics": _ep("get diagnostics", 200),
    "get_context": _ep("get context", 200),
    "delete_context": _ep("delete context", 204, body="none"),
    "trigger_inject": _ep("trigger inject node", 200, body="none"),
    "enable_debug_node": _ep("enable debug node", 200, body="none"),
    "disable_debug_node": _ep("disable debug node", 201, body="none"),
    "get_nodes": _ep("get nodes", 200),
    "install_node": _ep("install node module", 200),
    "set_node_module_state": _ep("set node module state", 200),
    "remove_node_module": _ep("remove node module", 204, body="none"),
}


class NodeRedClient:
    """Thin async wrapper around the Node-RED admin HTTP API.

    Every method issues exactly one request and either returns a validated
    value or raises a :class:`~nodered_mcp.client.errors.NodeRedError`.
    """

    def __init__(self, settings: Settings | Connection) -> None:
        if isinstance(settings, Settings):
            connection = settings.connection
            timeout = settings.timeout
        else:
            connection = settings
            timeout = None
        self._connection = connection
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout, connect=10.0)
        self._client = httpx.AsyncClient(
            base_url=connection.base_url,
            headers=connection.headers,
            **kwargs,
        )

    @property
    def connection(self) -> Connection:
        return self._connection

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> NodeRedClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Any = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        endpoint = ENDPOINTS[operation]
        kwargs: dict[str, Any] = {}
        if payload is not None:
            kwargs["json"] = payload
        if params:
            kwargs["params"] = params
        if headers:
            kwargs["headers"] = headers

        logger.debug("%s %s", method, path)
        try:
            r = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise TransportError(method, path, str(e) or type(e).__name__) from e

        if r.status_code not in endpoint.success:
            logger.error("%s %s -> %s", method, path, r.status_code)
            raise RemoteError(endpoint.action, r.status_code, r.text)
        return r

    @staticmethod
    def _json(r: httpx.Response, action: str) -> Any:
        try:
            return r.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SchemaError(path="", expected=f"JSON body for {action}", actual=repr(r.text[:80])) from e

    async def _call(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        r = await self._request(operation, method, path, **kwargs)
        if ENDPOINTS[operation].body == "none":
            return None
        return self._json(r, ENDPOINTS[operation].action)

    @staticmethod
    def _context_path(scope: str, id: str | None, key: str | None) -> str:
        if scope not in CONTEXT_SCOPES:
            raise ValueError(f"Invalid context scope {scope!r}; expected one of global, flow, node")
        parts = ["/context", scope]
        if scope != "global" and id:
            parts.append(_seg(id))
        if key:
            parts.append(_seg(key))
        return "/".join(parts)

    # ==================================================================
    # FLOWS
    # ==================================================================

    async def get_flows(self) -> FlowSet:
        data = await self._call("get_flows", "GET", "/flows")
        return parse_model(FlowSet, data)

    async def create_flow(self, flow: FlowUpdateRequest) -> FlowIdReply:
        data = await self._call("create_flow", "POST", "/flow", payload=dump(flow))
        return parse_model(FlowIdReply, data)

    async def update_flow(self, flow_id: str, flow: FlowUpdateRequest) -> FlowIdReply:
        # Node-RED answers 204 with or without a body; never read it then.
        r = await self._request("update_flow", "PUT", f"/flow/{_seg(flow_id)}", payload=dump(flow))
        if r.status_code == 204:
            return FlowIdReply(id=flow_id)
        return parse_model(FlowIdReply, self._json(r, ENDPOINTS["update_flow"].action))

    async def delete_flow(self, flow_id: str) -> None:
        await self._call("delete_flow", "DELETE", f"/flow/{_seg(flow_id)}")

    # ==================================================================
    # RUNTIME STATE (needs runtimeState.enabled in the runtime settings)
    # ==================================================================

    async def get_flow_state(self) -> FlowRuntimeState:
        data = await self._call("get_flow_state", "GET", "/flows/state")
        return parse_model(FlowRuntimeState, data)

    async def set_flow_state(self, state: str) -> FlowRuntimeState:
        if state not in FLOW_STATES:
            raise ValueError(f"Invalid flow state {state!r}; expected 'start' or 'stop'")
        data = await self._call("set_flow_state", "POST", "/flows/state", payload={"state": state})
        return parse_model(FlowRuntimeState, data)

    # ==================================================================
    # SETTINGS / DIAGNOSTICS
    # ==================================================================

    async def get_settings(self) -> RuntimeSettings:
        data = await self._call("get_settings", "GET", "/settings")
        return parse_model(RuntimeSettings, data)

    async def get_diagnostics(self) -> RuntimeDiagnostics:
        data = await self._call("get_diagnostics", "GET", "/diagnostics")
        return parse_model(RuntimeDiagnostics, data)

    # ==================================================================
    # CONTEXT
    # ==================================================================

    async def get_context(
        self,
        scope: str,
        id: str | None = None,
        key: str | None = None,
        store: str | None = None,
    ) -> Any:
        path = self._context_path(scope, id, key)
        params = {"store": store} if store else None
        return await self._call("get_context", "GET", path, params=params)

    async def delete_context(
        self,
        scope: str,
        id: str | None,
        key: str,
        store: str | None = None,
    ) -> None:
        if scope != "global" and not id:
            raise ValueError(f'id is required when scope is "{scope}"')
        if not key:
            raise ValueError("key is required to delete a context value")
        path = self._context_path(scope, id, key)
        params = {"store": store} if store else None
        await self._call("delete_context", "DELETE", path, params=params)

    # ==================================================================
    # INJECT / DEBUG
    # ==================================================================

    async def trigger_inject(self, node_id: str) -> None:
        await self._call("trigger_inject", "POST", f"/inject/{_seg(node_id)}")

    async def set_debug_node_state(self, node_id: str, enabled: bool) -> None:
        action = "enable" if enabled else "disable"
        await self._call(f"{action}_debug_node", "POST", f"/debug/{_seg(node_id)}/{action}")

    # ==================================================================
    # NODE MODULES
    # ==================================================================

    async def get_nodes(self) -> list[NodeModule]:
        data = await self._call("get_nodes", "GET", "/nodes", headers={"Accept": "application/json"})
        return parse_model(NODE_MODULE_LIST, data)

    async def install_node(self, module: str) -> NodeModule:
        data = await self._call("install_node", "POST", "/nodes", payload={"module": module})
        return parse_model(NodeModule, data)

    async def set_node_module_state(self, module: str, enabled: bool) -> NodeModule:
        data = await self._call(
            "set_node_module_state", "PUT", f"/nodes/{_seg(module, _MODULE_SAFE)}", payload={"enabled": enabled},
        )
        return parse_model(NodeModule, data)

    async def remove_node_module(self, module: str) -> None:
        await self._call("remove_node_module", "DELETE", f"/nodes/{_seg(module, _MODULE_SAFE)}")
