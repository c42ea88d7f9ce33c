"""
Flattened JSON-LD model: Things, Relations and Operations.

A parsed document is a :class:`Thing` (one per JSON object carrying
``@id``, plus the root) whose attributes point at other Things through
:class:`Relation` values.  Hydra affordances declared under the
``operation`` property become :class:`Operation` entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pyld import jsonld

# ── Type aliases ───────────────────────────────────────────────────

#: Ordered context frames, each a ``{"@vocab": ...}`` declaration or a
#: term-to-definition mapping.  Non-mapping frames are ignored.
Context = List[Any]

#: Property name -> scalar, nested attribute map, Relation,
#: list of Relation, or list of nested attribute maps.
Attributes = Dict[str, Any]

#: Thing id -> Thing, or ``None`` for a reference not embedded in the
#: document.
FlattenedThings = Dict[str, Optional["Thing"]]

AttributeValue = Union[
    None, str, int, float, bool,
    Attributes, "Relation", List["Relation"], List[Attributes],
]


# ═══════════════════════════════════════════════════════════════════
# MODEL
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Operation:
    """A Hydra operation advertised by a Thing."""

    id: str = ""
    target: str = ""
    method: str = ""
    expects: str = ""
    types: list[str] = field(default_factory=list, hash=False)

    def resolve_target(self, base: Optional[str]) -> str:
        """Resolve :attr:`target` against *base* (RFC 3986).

        Absolute targets and a ``None`` base leave the target untouched.
        """
        return jsonld.prepend_base(base, self.target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "@id": self.id,
            "@type": list(self.types),
            "target": self.target,
            "method": self.method,
            "expects": self.expects,
        }


@dataclass(frozen=True)
class Thing:
    """A flattened JSON-LD node.

    Hashing uses the id only; the container fields are mutable objects
    and take part in equality but not in the hash.
    """

    id: str = ""
    types: list[str] = field(default_factory=list, hash=False)
    attributes: Attributes = field(default_factory=dict, hash=False)
    operations: dict[str, Operation] = field(default_factory=dict, hash=False)

    def get_operation(self, method: str) -> Optional[Operation]:
        """Return the first operation using HTTP *method*, if any."""
        wanted = method.upper()
        for operation in self.operations.values():
            if operation.method.upper() == wanted:
                return operation
        return None

    def to_dict(self) -> dict[str, Any]:
        """Render as plain JSON data.

        Relations collapse to ``{"@id": ...}`` references so the result
        stays flat even when the model embeds resolved Things.
        """
        result: dict[str, Any] = {"@id": self.id, "@type": list(self.types)}
        for key, value in self.attributes.items():
            result[key] = _render(value)
        if self.operations:
            result["operation"] = [op.to_dict() for op in self.operations.values()]
        return result


@dataclass(frozen=True)
class Relation:
    """Reference from an attribute to another Thing by id.

    ``thing`` carries the target when it was embedded in the same
    document, and is ``None`` for a bare identifier-typed literal.
    """

    id: str
    thing: Optional[Thing] = None

    @property
    def is_resolved(self) -> bool:
        return self.thing is not None

    def to_dict(self) -> dict[str, Any]:
        return {"@id": self.id}


# -- Helpers ------------------------------------------------------------------


def _render(value: Any) -> Any:
    if isinstance(value, Relation):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _render(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_render(v) for v in value]
    return value
