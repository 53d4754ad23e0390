"""Tool catalog for the 17 Node-RED MCP tools.

``TOOL_CATALOG`` is the single source of truth for tool metadata (name,
description, JSON schema).  The MCP server consumes it directly.

Adding a tool: append to ``TOOL_CATALOG`` and add the method to
``NodeRedMCPTools``.  Two files, nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ToolDef:
    """Definition of a tool exposed to MCP clients.

    parameters follows JSON Schema format:
        {"type": "object", "properties": {...}, "required": [...]}
    """

    name: str
    description: str
    parameters: dict[str, Any]


def _td(name: str, desc: str, props: dict[str, Any] | None = None, req: list[str] | None = None) -> ToolDef:
    return ToolDef(
        name=name,
        description=desc,
        parameters={"type": "object", "properties": props or {}, "required": req or []},
    )


def _str(description: str) -> dict:
    return {"type": "string", "description": description}


def _bool(description: str) -> dict:
    return {"type": "boolean", "description": description}


def _enum(description: str, *values: str) -> dict:
    return {"type": "string", "enum": list(values), "description": description}


_FLOW_JSON = "JSON string containing flow data with format: {id, label, nodes: [], configs: []}"
_SCOPE = ("global", "flow", "node")


# ==================================================================
# TOOL_CATALOG: each entry: (method_name_on_NodeRedMCPTools, ToolDef)
# ==================================================================

TOOL_CATALOG: list[tuple[str, ToolDef]] = [
    # ── FLOWS (5) ─────────────────────────────────────────────────
    ("get_flows", _td(
        "get_flows",
        "Get all flows from the Node-RED instance, including the current revision number",
    )),
    ("create_flow", _td(
        "create_flow",
        "Create a new flow (tab) with POST /flow. Other flows are left untouched",
        {"flow": _str(_FLOW_JSON)},
        ["flow"],
    )),
    ("update_flow", _td(
        "update_flow",
        "Replace a single flow by ID with PUT /flow/:id. Only the specified flow is affected",
        {"flow_id": _str("ID of the flow to update"), "updates": _str(_FLOW_JSON)},
        ["flow_id", "updates"],
    )),
    ("validate_flow", _td(
        "validate_flow",
        "Validate a flow payload locally without deploying: checks required ids and types",
        {"flow": _str(_FLOW_JSON)},
        ["flow"],
    )),
    ("delete_flow", _td(
        "delete_flow",
        "Delete a flow and all its nodes by ID",
        {"flow_id": _str("ID of the flow to delete")},
        ["flow_id"],
    )),

    # ── RUNTIME STATE (2) ─────────────────────────────────────────
    ("get_flow_state", _td(
        "get_flow_state",
        "Get whether flows are started or stopped. Requires runtimeState to be enabled in Node-RED settings",
    )),
    ("set_flow_state", _td(
        "set_flow_state",
        "Start or stop all flows. Requires runtimeState to be enabled in Node-RED settings",
        {"state": _enum('"start" to run flows, "stop" to halt them', "start", "stop")},
        ["state"],
    )),

    # ── CONTEXT (2) ───────────────────────────────────────────────
    ("get_context", _td(
        "get_context",
        "Read context store data at global, flow or node scope. Omit key to list all keys",
        {
            "scope": _enum("Context scope to read from", *_SCOPE),
            "id": _str("Flow or node ID (required for flow and node scope)"),
            "key": _str("Context key to read. Omit to list all keys"),
            "store": _str("Optional context store name"),
        },
        ["scope"],
    )),
    ("delete_context", _td(
        "delete_context",
        "Delete a context store value at global, flow or node scope",
        {
            "scope": _enum("Context scope to delete from", *_SCOPE),
            "id": _str("Flow or node ID (required for flow and node scope)"),
            "key": _str("Context key to delete"),
            "store": _str("Optional context store name"),
        },
        ["scope", "key"],
    )),

    # ── INJECT / DEBUG (2) ────────────────────────────────────────
    ("trigger_inject", _td(
        "trigger_inject",
        "Trigger an inject node, as if its button was pressed in the editor",
        {"node_id": _str("ID of the inject node")},
        ["node_id"],
    )),
    ("set_debug_state", _td(
        "set_debug_state",
        "Enable or disable the output of a debug node",
        {"node_id": _str("ID of the debug node"), "enabled": _bool("true to enable, false to disable")},
        ["node_id", "enabled"],
    )),

    # ── NODE MODULES (4) ──────────────────────────────────────────
    ("get_nodes", _td(
        "get_nodes",
        "List installed node modules with their node sets",
    )),
    ("install_node", _td(
        "install_node",
        "Install a node module from the npm registry",
        {"module": _str('npm module name, e.g. "node-red-contrib-example"')},
        ["module"],
    )),
    ("set_node_module_state", _td(
        "set_node_module_state",
        "Enable or disable a node module. Disabled modules' nodes are unavailable",
        {"module": _str("Name of the node module"), "enabled": _bool("Whether the module is enabled")},
        ["module", "enabled"],
    )),
    ("remove_node_module", _td(
        "remove_node_module",
        "Remove an installed node module. Core modules cannot be removed",
        {"module": _str("Name of the node module to remove")},
        ["module"],
    )),

    # ── RUNTIME INFO (2) ──────────────────────────────────────────
    ("get_settings", _td(
        "get_settings",
        "Get runtime settings: version, httpNodeRoot, user info and editor options",
    )),
    ("get_diagnostics", _td(
        "get_diagnostics",
        "Get diagnostics: Node.js version, OS details, memory usage and runtime modules",
    )),
]
