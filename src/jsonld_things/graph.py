"""Helpers for consuming the flattened-things map.

``parse_thing`` records references it could not resolve inside the
document as ``None`` entries.  Once every document of interest has been
parsed and the maps merged, these helpers look the references up.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from pyld import jsonld

from jsonld_things.models import FlattenedThings, Relation, Thing


def unresolved_ids(things: FlattenedThings) -> list[str]:
    """Ids whose entry in *things* is still a ``None`` placeholder."""
    return [thing_id for thing_id, thing in things.items() if thing is None]


def resolve_relation(
    relation: Relation,
    things: FlattenedThings,
    base: Optional[str] = None,
) -> Relation:
    """Fill in ``relation.thing`` from *things* when it is missing.

    A relative ``relation.id`` is resolved against *base* before the
    lookup; the returned relation then carries the absolute id.
    """
    if relation.is_resolved:
        return relation
    thing_id = jsonld.prepend_base(base, relation.id)
    thing = things.get(thing_id)
    if thing is None:
        return relation
    return Relation(id=thing_id, thing=thing)


def link_thing(
    thing: Thing,
    things: FlattenedThings,
    base: Optional[str] = None,
) -> Thing:
    """Return a copy of *thing* with its bare references resolved.

    Relations nested in attribute maps and lists are resolved too.  The
    Things carried by already resolved relations are left as they are.
    Relative ids are resolved against *base*, as in
    :func:`resolve_relation`.
    """
    attributes = {k: _link_value(v, things, base) for k, v in thing.attributes.items()}
    return dataclasses.replace(thing, attributes=attributes)


def relations_of(thing: Thing) -> list[tuple[str, Relation]]:
    """List every relation of *thing* with its top-level attribute name."""
    found: list[tuple[str, Relation]] = []
    for key, value in thing.attributes.items():
        for relation in _iter_relations(value):
            found.append((key, relation))
    return found


# -- Helpers ------------------------------------------------------------------


def _link_value(value: Any, things: FlattenedThings, base: Optional[str]) -> Any:
    if isinstance(value, Relation):
        return resolve_relation(value, things, base)
    if isinstance(value, dict):
        return {k: _link_value(v, things, base) for k, v in value.items()}
    if isinstance(value, list):
        return [_link_value(v, things, base) for v in value]
    return value


def _iter_relations(value: Any):
    if isinstance(value, Relation):
        yield value
    elif isinstance(value, dict):
        for v in value.values():
            yield from _iter_relations(v)
    elif isinstance(value, list):
        for v in value:
            yield from _iter_relations(v)
