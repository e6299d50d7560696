"""Node model for estreewalk.

Nodes are plain mappings discriminated by a ``type`` field. This module
holds the few rules that decide what counts as a node and how a child
slot's value is classified before the walker recurses into it.
"""

from enum import Enum
from typing import Any, Iterator, Mapping, Optional

PROPERTY_TYPE = "Property"
TYPE_FIELD = "type"


class ChildKind(Enum):
    """Classification of the value stored under a child key."""
    ABSENT = "absent"        # None or otherwise empty, nothing to visit
    NODE = "node"            # A single visitable node
    SEQUENCE = "sequence"    # Ordered entries, each classified on its own
    OPAQUE = "opaque"        # Scalars and type-less values, never visited


def node_type(node: Any) -> Optional[str]:
    """Return the node's own ``type`` if it is a non-empty string."""
    if not isinstance(node, Mapping):
        return None
    value = node.get(TYPE_FIELD)
    if isinstance(value, str) and value:
        return value
    return None


def effective_type(node: Mapping[str, Any]) -> str:
    """Type name used for handler dispatch and key lookup.

    Type-less nodes dispatch as ``Property``: object literal entries are
    often shaped as bare ``{key, value}`` pairs.
    """
    return node_type(node) or PROPERTY_TYPE


def is_node(value: Any) -> bool:
    """Check if a value is node-shaped (a mapping with a string ``type``)."""
    return isinstance(value, Mapping) and isinstance(value.get(TYPE_FIELD), str)


def classify_child(value: Any, as_property: bool = False) -> ChildKind:
    """Classify a child slot value once, before recursion.

    Args:
        value: The value stored under a child key
        as_property: Treat any mapping as a node (object literal entries)

    Returns:
        The ChildKind of the value
    """
    if value is None or (not value and not isinstance(value, Mapping)):
        return ChildKind.ABSENT
    if isinstance(value, (list, tuple)):
        return ChildKind.SEQUENCE
    if is_node(value) or (as_property and isinstance(value, Mapping)):
        return ChildKind.NODE
    return ChildKind.OPAQUE


def iter_child_nodes(value: Any, as_property: bool = False) -> Iterator[Mapping[str, Any]]:
    """Yield the visitable nodes held by a child slot, in order.

    Absent and opaque values yield nothing. Sequence entries that are
    None, scalars or type-less mappings are skipped silently, unless
    ``as_property`` is set: then every mapping entry is kept.
    """
    kind = classify_child(value)
    if kind is ChildKind.NODE:
        yield value
    elif kind is ChildKind.SEQUENCE:
        for entry in value:
            if classify_child(entry, as_property) is ChildKind.NODE:
                yield entry


def child_value(node: Any, key: str) -> Any:
    """Fetch the value stored under a child key (None when missing)."""
    if not isinstance(node, Mapping):
        return None
    return node.get(key)
