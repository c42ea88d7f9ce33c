"""
Thing parsing — the entry point of the flattener.

``parse_thing`` turns a decoded JSON-LD document into a :class:`Thing`
and a flat map of every Thing embedded beneath it::

    thing, things = parse_thing(document)

Parsing is total: missing or mistyped fields fall back to empty values
and nothing is raised for malformed input.  Callers needing to detect
broken documents inspect the result (an empty ``id`` or ``types``).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pyld.jsonld import JsonLdProcessor

from jsonld_things import flattener
from jsonld_things.context import context_from_json, resolve_context
from jsonld_things.models import Context, FlattenedThings, Operation, Thing

logger = logging.getLogger(__name__)

OPERATION_KEY = "operation"


def parse_thing(
    json: dict[str, Any],
    parent_context: Optional[Context] = None,
) -> tuple[Thing, FlattenedThings]:
    """Parse one JSON-LD node and everything embedded in it.

    Args:
        json: A decoded JSON object.  Anything else reads as ``{}``.
        parent_context: The resolved context of the enclosing node, used
            for vocabulary inheritance.

    Returns:
        A tuple of (thing, flattened_things).  ``flattened_things`` maps
        the id of every nested Thing to that Thing, and the id of every
        ``@id``-typed literal reference to ``None``.
    """
    if not isinstance(json, dict):
        logger.debug("Treating non-object node %r as empty", type(json).__name__)
        json = {}

    thing_id = _string_field(json, "@id")
    types = parse_type(json.get("@type"))
    context = resolve_context(context_from_json(json.get("@context")), parent_context)

    operations = parse_operations(json)
    attributes, things = flattener.parse_attributes(json, context)

    thing = Thing(id=thing_id, types=types, attributes=attributes, operations=operations)

    return thing, things


def parse_type(value: Any) -> list[str]:
    """Normalize a ``@type`` value to a list of strings.

    >>> parse_type("Person")
    ['Person']
    >>> parse_type(42)
    []
    """
    if value is None:
        return []

    types = JsonLdProcessor.arrayify(value)
    if not all(isinstance(t, str) for t in types):
        logger.debug("Ignoring malformed @type %r", value)
        return []
    return list(types)


def parse_operations(json: dict[str, Any]) -> dict[str, Operation]:
    """Read the ``operation`` list of a node, keyed by operation id.

    Later operations replace earlier ones sharing the same id.
    """
    operations_json = json.get(OPERATION_KEY) if isinstance(json, dict) else None
    if operations_json is None:
        return {}
    if not isinstance(operations_json, list) or not all(
        isinstance(op, dict) for op in operations_json
    ):
        logger.debug("Ignoring malformed %r value", OPERATION_KEY)
        return {}

    operations: dict[str, Operation] = {}
    for operation_json in operations_json:
        operation = Operation(
            id=_string_field(operation_json, "@id"),
            target=_string_field(operation_json, "target"),
            method=_string_field(operation_json, "method"),
            expects=_string_field(operation_json, "expects"),
            types=parse_type(operation_json.get("@type")),
        )
        operations[operation.id] = operation

    return operations


# -- Helpers ------------------------------------------------------------------


def _string_field(json: dict[str, Any], key: str) -> str:
    value = json.get(key, "")
    if not isinstance(value, str):
        logger.debug("Ignoring non-string %r value %r", key, value)
        return ""
    return value
