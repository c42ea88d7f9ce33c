"""Context resolution for flattening.

Only two things are read from a JSON-LD ``@context``: the vocabulary
(``@vocab``), which child nodes inherit from their parent, and term
definitions coercing a property to ``@type: "@id"``, which turn string
values of that property into references.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pyld.jsonld import JsonLdProcessor

from jsonld_things.models import Context

logger = logging.getLogger(__name__)

VOCAB_KEY = "@vocab"
ID_TYPE = "@id"


def context_from_json(value: Any) -> Context:
    """Read a node's ``@context`` value as a list of frames.

    A single mapping becomes a one-frame context.  Absent values yield
    an empty context; remote context URLs are kept as frames but never
    match anything, since frames are only inspected when they are
    mappings.
    """
    if value is None:
        return []
    return list(JsonLdProcessor.arrayify(value))


def resolve_context(
    context: Optional[Context],
    parent_context: Optional[Context],
) -> Context:
    """Merge a node's own context with the one inherited from its parent.

    The parent's vocabulary is appended (lowest precedence) only when the
    node declares none itself.  Term definitions are never inherited.

    Args:
        context: The node's own context frames.
        parent_context: The resolved context of the enclosing node.

    Returns:
        The context used to interpret the node's attributes.
    """
    if context is not None and parent_context is not None:
        if not has_vocab(context) and has_vocab(parent_context):
            return [*context, {VOCAB_KEY: get_vocab(parent_context) or ""}]
        return context

    if context is not None:
        return context
    if parent_context is not None:
        return parent_context
    return []


def has_vocab(context: Context) -> bool:
    """True when some frame declares ``@vocab``."""
    return _vocab_frame(context) is not None


def get_vocab(context: Context) -> Optional[str]:
    """Return the vocabulary of the first frame declaring one.

    A declared vocabulary that is not a string reads as ``None``.
    """
    frame = _vocab_frame(context)
    if frame is None:
        return None

    vocab = frame[VOCAB_KEY]
    if not isinstance(vocab, str):
        logger.debug("Ignoring non-string @vocab %r", vocab)
        return None
    return vocab


def is_id(name: str, context: Optional[Context]) -> bool:
    """True if *name* is defined with ``"@type": "@id"`` in *context*."""
    if context is None:
        return False

    for frame in context:
        if not isinstance(frame, dict):
            continue
        definition = frame.get(name)
        if isinstance(definition, dict) and definition.get("@type") == ID_TYPE:
            return True
    return False


# -- Helpers ------------------------------------------------------------------


def _vocab_frame(context: Context) -> Optional[dict[str, Any]]:
    for frame in context:
        if isinstance(frame, dict) and VOCAB_KEY in frame:
            return frame
    return None
