"""Structural schemas for Node-RED admin API payloads.

All records are permissive: the named fields below are checked, everything
else is kept in the model's extra bag so plugin-defined node properties
round-trip untouched.  Serialize with :func:`dump` to get the wire shape back.

Public API:
    FlowSet, FlowTab, FlowNode, ConfigNode, FlowUpdateRequest, FlowIdReply,
    FlowRuntimeState, NodeSet, NodeModule, RuntimeSettings, RuntimeDiagnostics
    parse_model()  : validate raw JSON, raising SchemaError on mismatch.
    dump()         : model → JSON-safe dict/list with wire names.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from nodered_mcp.client.errors import SchemaError

logger = logging.getLogger("nodered_mcp.client.schemas")

_OPEN = ConfigDict(extra="allow", populate_by_name=True)


# ---------------------------------------------------------------------------
# Flows
# ---------------------------------------------------------------------------


class FlowNode(BaseModel):
    model_config = _OPEN

    id: str
    type: str
    parent_flow_id: str | None = Field(default=None, alias="z")
    name: str | None = None
    wires: list[list[str]] | None = None


class FlowTab(BaseModel):
    model_config = _OPEN

    id: str
    type: Literal["tab"]
    label: str
    disabled: bool | None = None
    info: str | None = None
    env: list[Any] | None = None


class ConfigNode(BaseModel):
    model_config = _OPEN

    id: str
    type: str


# Tabs are tried first; anything that is not a well-formed tab is a node.
FlowItem = Annotated[Union[FlowTab, FlowNode], Field(union_mode="left_to_right")]


class FlowSet(BaseModel):
    """Reply of ``GET /flows`` with the v2 API header."""

    model_config = ConfigDict(populate_by_name=True)

    revision: str = Field(alias="rev")
    items: list[FlowItem] = Field(alias="flows")


class FlowUpdateRequest(BaseModel):
    """Body of ``POST /flow`` and ``PUT /flow/{id}``."""

    model_config = _OPEN

    id: str
    label: str | None = None
    disabled: bool | None = None
    info: str | None = None
    nodes: list[FlowNode] | None = None
    configs: list[ConfigNode] | None = None


class FlowIdReply(BaseModel):
    model_config = _OPEN

    id: str


class FlowRuntimeState(BaseModel):
    model_config = _OPEN

    state: Literal["start", "stop"]


# ---------------------------------------------------------------------------
# Node modules
# ---------------------------------------------------------------------------


class NodeSet(BaseModel):
    model_config = _OPEN

    id: str
    name: str
    types: list[str]
    enabled: bool
    module: str
    version: str | None = None


class NodeModule(BaseModel):
    """An installed module.

    The runtime sends ``nodes`` either keyed by set name or as a plain list,
    depending on its version.  Both are folded into one mapping here so
    callers never look at the wire shape.
    """

    model_config = _OPEN

    name: str
    version: str
    local: bool | None = None
    user: bool | None = None
    node_sets: dict[str, NodeSet] | None = Field(default=None, alias="nodes")

    @field_validator("node_sets", mode="before")
    @classmethod
    def _normalize_node_sets(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        keyed: dict[str, Any] = {}
        for entry in v:
            key = entry.get("name") if isinstance(entry, dict) else None
            if not key or key in keyed:
                key = entry.get("id") if isinstance(entry, dict) else None
            if not key or key in keyed:
                i = len(keyed)
                while str(i) in keyed:
                    i += 1
                key = str(i)
            keyed[key] = entry
        return keyed


# ---------------------------------------------------------------------------
# Runtime info
# ---------------------------------------------------------------------------


class RuntimeSettings(BaseModel):
    model_config = _OPEN

    version: str | None = None
    http_node_root: str | None = Field(default=None, alias="httpNodeRoot")
    user: dict[str, Any] | None = None


class RuntimeDiagnostics(BaseModel):
    model_config = _OPEN

    report: str | None = None
    scope: str | None = None


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _short(value: Any, limit: int = 80) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def parse_model(model: type[BaseModel] | TypeAdapter, data: Any, *, what: str = "") -> Any:
    """Validate *data* against a model class or a ``TypeAdapter``.

    The first pydantic error becomes a SchemaError carrying the dotted path
    (prefixed with *what* when given), pydantic's own description of what
    was expected, and the offending input.
    """
    try:
        if isinstance(model, TypeAdapter):
            return model.validate_python(data)
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(p) for p in first.get("loc", ()))
        if what:
            path = f"{what}.{path}" if path else what
        err = SchemaError(path=path, expected=first.get("msg", "valid value"), actual=_short(first.get("input")))
        logger.error("Schema mismatch: %s", err)
        raise err from e


def dump(value: Any) -> Any:
    """Serialize models (or lists of models) back to their wire shape."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, list):
        return [dump(v) for v in value]
    return value


NODE_MODULE_LIST: TypeAdapter[list[NodeModule]] = TypeAdapter(list[NodeModule])
