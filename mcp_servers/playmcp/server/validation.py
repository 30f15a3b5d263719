"""
Argument validation against a tool's inputSchema.

Checks only what the descriptors declare: required keys and the four
primitive shapes (string, number, boolean, array of strings). Unknown keys are
ignored so older clients that send extra fields keep working.
"""

from __future__ import annotations

from typing import Any

from ..errors import ArgumentError

_TYPE_NAMES = {"string", "number", "boolean", "array", "integer"}


def _matches(value: Any, schema: dict[str, Any]) -> bool:
    expected = schema.get("type")
    if expected not in _TYPE_NAMES:
        return True
    if expected == "string":
        return isinstance(value, str)
    if expected == "boolean":
        return isinstance(value, bool)
    if expected == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    # array
    if not isinstance(value, list):
        return False
    item_schema = schema.get("items") or {}
    return all(_matches(item, item_schema) for item in value)


def _describe(schema: dict[str, Any]) -> str:
    expected = schema.get("type", "value")
    if expected == "array":
        item_type = (schema.get("items") or {}).get("type", "value")
        return f"array of {item_type}"
    return str(expected)


def validate_arguments(tool: str, input_schema: dict[str, Any], arguments: Any) -> dict[str, Any]:
    """Return the arguments dict or raise ArgumentError.

    A required string that is empty counts as missing. Optional arguments sent
    as null are treated as absent.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ArgumentError("Arguments must be an object", tool=tool)

    properties: dict[str, Any] = input_schema.get("properties") or {}
    for name in input_schema.get("required") or []:
        value = arguments.get(name)
        if value is None or (isinstance(value, str) and not value and properties.get(name, {}).get("type") == "string"):
            raise ArgumentError(f"Missing required argument: {name}", tool=tool)

    for name, schema in properties.items():
        value = arguments.get(name)
        if value is None:
            continue
        if not _matches(value, schema):
            raise ArgumentError(
                f"Invalid argument '{name}': expected {_describe(schema)}",
                tool=tool,
            )
        enum = schema.get("enum")
        if enum and value not in enum:
            raise ArgumentError(
                f"Invalid argument '{name}': expected one of {', '.join(map(str, enum))}",
                tool=tool,
            )
    return arguments
