"""
jsonld-things: flatten JSON-LD / Hydra documents into Things

Turns a decoded JSON-LD document into a flat map of typed entities
(Things) linked by id-based Relations, with Hydra operations attached.
"""

__version__ = "0.1.0"

from jsonld_things.models import (
    AttributeValue,
    Attributes,
    Context,
    FlattenedThings,
    Operation,
    Relation,
    Thing,
)
from jsonld_things.parser import parse_thing, parse_type, parse_operations
from jsonld_things.context import (
    context_from_json,
    resolve_context,
    has_vocab,
    get_vocab,
    is_id,
)
from jsonld_things.flattener import (
    filter_properties,
    flatten,
    parse_attributes,
    is_embedded_thing_array,
)
from jsonld_things.graph import (
    unresolved_ids,
    resolve_relation,
    link_thing,
    relations_of,
)

__all__ = [
    # Model
    "AttributeValue",
    "Attributes",
    "Context",
    "FlattenedThings",
    "Operation",
    "Relation",
    "Thing",
    # Parsing
    "parse_thing",
    "parse_type",
    "parse_operations",
    "parse_attributes",
    "filter_properties",
    "flatten",
    "is_embedded_thing_array",
    # Context
    "context_from_json",
    "resolve_context",
    "has_vocab",
    "get_vocab",
    "is_id",
    # Graph
    "unresolved_ids",
    "resolve_relation",
    "link_thing",
    "relations_of",
]
