"""Local flow validator: accumulating rules, never raises."""

from __future__ import annotations

from nodered_mcp.client.schemas import FlowUpdateRequest
from nodered_mcp.client.validation import ValidationResult, validate_flow


def test_valid_flow():
    """A flow with an id and no members is valid."""
    result = validate_flow({"id": "1", "label": "x"})
    assert result.valid is True
    assert result.errors is None
    assert result.as_dict() == {"valid": True}


def test_empty_id():
    """An empty flow id is reported."""
    result = validate_flow({"id": ""})
    assert result.valid is False
    assert "Flow missing required id field" in result.errors


def test_missing_id():
    """A missing flow id is reported."""
    result = validate_flow({"label": "x"})
    assert result.errors == ["Flow missing required id field"]


def test_non_string_id():
    """A numeric flow id is invalid."""
    assert validate_flow({"id": 5}).valid is False


def test_node_missing_id():
    """A node without an id is reported."""
    result = validate_flow({"id": "1", "nodes": [{"id": "", "type": "inject"}]})
    assert result.valid is False
    assert result.errors == ["Node missing required id field"]


def test_node_missing_type_uses_node_id():
    """The missing-type message names the node."""
    result = validate_flow({"id": "1", "nodes": [{"id": "n7", "type": ""}]})
    assert result.errors == ["Node n7 missing required type field"]


def test_config_errors():
    """Config nodes get their own wording."""
    result = validate_flow({"id": "1", "configs": [{"id": "", "type": ""}]})
    assert result.valid is False
    assert result.errors == [
        "Config node missing required id field",
        "Config node  missing required type field",
    ]


def test_accumulates_in_order():
    """All problems are reported, flow first, then nodes, then configs."""
    result = validate_flow({
        "id": "",
        "nodes": [{"id": "a"}, {"type": "debug"}],
        "configs": [{"id": "c"}],
    })
    assert result.errors == [
        "Flow missing required id field",
        "Node a missing required type field",
        "Node missing required id field",
        "Config node c missing required type field",
    ]
    assert result.as_dict()["errors"] == result.errors


def test_accepts_model():
    """A FlowUpdateRequest model is accepted as input."""
    flow = FlowUpdateRequest.model_validate({"id": "1", "nodes": [{"id": "n1", "type": "inject"}]})
    assert validate_flow(flow) == ValidationResult(valid=True)


def test_never_raises_on_garbage():
    """Malformed input yields a failed result instead of an exception."""
    result = validate_flow({"id": "1", "nodes": ["not-a-node"]})
    assert result.valid is False
    assert len(result.errors) == 1

    assert validate_flow(["not", "a", "flow"]).valid is False
    assert validate_flow(None).valid is False
