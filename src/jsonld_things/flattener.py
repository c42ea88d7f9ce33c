"""
Attribute flattening for JSON-LD nodes.

Walks the properties of one JSON object and turns each value into an
attribute: nested objects carrying ``@id`` become :class:`Relation`
values backed by their own :class:`Thing`, nested objects without one
stay nested attribute maps, and strings under ``@id``-typed properties
become unresolved references.  Every Thing found on the way is collected
into a flat id-keyed map returned next to the attributes.

Each call works on its own attribute and thing maps and returns them;
callers merge the results explicitly.  The merge policy is not uniform:
single nested objects keep existing entries on id collisions, arrays of
embedded things let the newer entry win, and ``@id``-typed literals
always overwrite.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from jsonld_things import parser
from jsonld_things.context import is_id
from jsonld_things.models import (
    Attributes,
    Context,
    FlattenedThings,
    Relation,
)

logger = logging.getLogger(__name__)

METADATA_KEYS = ("@id", "@context", "@type")


# ═══════════════════════════════════════════════════════════════════
# ATTRIBUTES
# ═══════════════════════════════════════════════════════════════════


def parse_attributes(
    json: dict[str, Any],
    context: Context,
) -> tuple[Attributes, FlattenedThings]:
    """Flatten the non-metadata properties of *json*.

    Args:
        json: A decoded JSON object.  Anything else reads as ``{}``.
        context: The resolved context of the node owning *json*.

    Returns:
        A tuple of (attributes, flattened_things).
    """
    attributes: Attributes = {}
    things: FlattenedThings = {}

    for key, value in filter_properties(json).items():
        attributes, things = flatten(context, attributes, things, key, value)

    return attributes, things


def filter_properties(
    json: dict[str, Any],
    properties: Sequence[str] = METADATA_KEYS,
) -> dict[str, Any]:
    """Return *json* without the keys listed in *properties*."""
    if not isinstance(json, dict):
        return {}
    return {k: v for k, v in json.items() if k not in properties}


def flatten(
    context: Context,
    attributes: Attributes,
    things: FlattenedThings,
    key: str,
    value: Any,
) -> tuple[Attributes, FlattenedThings]:
    """Fold one property into copies of the accumulated maps.

    The value is classified in this order: object, array of objects,
    ``@id``-typed literal, plain value.
    """
    attributes = dict(attributes)
    things = dict(things)

    if isinstance(value, dict):
        parse_object(key, value, context, attributes, things)
    elif _is_object_array(value):
        parse_object_array(key, value, context, attributes, things)
    elif is_id(key, context):
        if not isinstance(value, str):
            logger.debug("Non-string value for @id-typed property %r", key)
            value = ""
        things[value] = None
        attributes[key] = Relation(id=value)
    else:
        attributes[key] = value

    return attributes, things


# ═══════════════════════════════════════════════════════════════════
# NESTED SHAPES
# ═══════════════════════════════════════════════════════════════════


def parse_object(
    key: str,
    value: dict[str, Any],
    context: Context,
    attributes: Attributes,
    things: FlattenedThings,
) -> None:
    """Store a nested object under *key*, updating the maps in place."""
    if "@id" in value:
        thing, embedded_things = parser.parse_thing(value, parent_context=context)

        attributes[key] = Relation(id=thing.id, thing=thing)
        _merge_keep_existing(things, embedded_things)
        things[thing.id] = thing
    else:
        nested_attributes, embedded_things = parse_attributes(value, context)

        attributes[key] = nested_attributes
        _merge_keep_existing(things, embedded_things)


def parse_object_array(
    key: str,
    value: list[dict[str, Any]],
    context: Context,
    attributes: Attributes,
    things: FlattenedThings,
) -> None:
    """Store a list of objects under *key*, updating the maps in place.

    Whether the list holds embedded Things is decided by its first
    element alone.
    """
    if is_embedded_thing_array(value):
        relations: list[Relation] = []

        # Elements do not inherit the enclosing context.
        for element in value:
            thing, embedded_things = parser.parse_thing(element)

            relations.append(Relation(id=thing.id, thing=thing))
            things.update(embedded_things)
            things[thing.id] = thing

        attributes[key] = relations
    else:
        attributes_list: list[Attributes] = []

        for element in value:
            nested_attributes, embedded_things = parse_attributes(element, context)

            attributes_list.append(nested_attributes)
            things.update(embedded_things)

        attributes[key] = attributes_list


def is_embedded_thing_array(value: Sequence[Any]) -> bool:
    """True if the first element of *value* is an object with ``@id``."""
    if not value:
        return False
    first = value[0]
    return isinstance(first, dict) and "@id" in first


# -- Helpers ------------------------------------------------------------------


def _is_object_array(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, dict) for v in value)


def _merge_keep_existing(things: FlattenedThings, other: FlattenedThings) -> None:
    for thing_id, thing in other.items():
        if thing_id not in things:
            things[thing_id] = thing
