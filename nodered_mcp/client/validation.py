"""Local structural check for flow payloads.

Runs before create/update so obviously broken payloads never reach the
runtime, and is exposed on its own as the ``validate_flow`` tool.  No I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger("nodered_mcp.client.validation")


@dataclass(frozen=True)
class ValidationResult:
    """Findings of :func:`validate_flow`.  ``errors`` is None iff valid."""

    valid: bool
    errors: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"valid": self.valid}
        if self.errors:
            out["errors"] = list(self.errors)
        return out


def _check_members(members: Any, label: str, errors: list[str]) -> None:
    for member in members or ():
        member_id = member.get("id")
        if not member_id:
            errors.append(f"{label} missing required id field")
        if not member.get("type"):
            errors.append(f"{label} {member_id if member_id is not None else ''} missing required type field")


def validate_flow(flow: Mapping[str, Any] | BaseModel) -> ValidationResult:
    """Check a flow update payload for missing ids and types.

    Violations are accumulated in order (flow id, then nodes, then config
    nodes).  Never raises: an unexpected failure while walking the payload is
    reported as a single error.
    """
    try:
        if isinstance(flow, BaseModel):
            flow = flow.model_dump(by_alias=True)
        errors: list[str] = []

        flow_id = flow.get("id")
        if not isinstance(flow_id, str) or not flow_id:
            errors.append("Flow missing required id field")

        _check_members(flow.get("nodes"), "Node", errors)
        _check_members(flow.get("configs"), "Config node", errors)

        if errors:
            return ValidationResult(valid=False, errors=errors)
        return ValidationResult(valid=True)
    except Exception as e:
        logger.warning("Flow validation aborted: %s", e)
        return ValidationResult(valid=False, errors=[str(e) or type(e).__name__])
