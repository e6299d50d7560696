"""Child-key registry for estreewalk.

The registry answers one question: which fields of a node hold its
children? Answers come from a per-call override table, then the
default table for the grammar, then a pluggable fallback policy.

The walker never follows a field that isn't named here. Extra fields
such as ``parent`` back-references are inert by construction.
"""

import functools
import json
import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from ..config import FallbackMode
from ..errors import InvalidOptionsError, UnknownNodeType
from .node import TYPE_FIELD, effective_type

logger = logging.getLogger(__name__)

ChildKeyTable = Mapping[str, Sequence[str]]

DEFAULT_KEYS_RESOURCE = "data/visitor_keys.json"

# Node types whose ``properties`` entries are visited even without a type
PROPERTY_CONTAINERS = frozenset({"ObjectExpression", "ObjectPattern"})
PROPERTY_FIELD = "properties"


def is_property_container(node_type: str, field: str) -> bool:
    """Check if a field holds object literal / destructuring entries."""
    return field == PROPERTY_FIELD and node_type in PROPERTY_CONTAINERS


def _freeze_table(raw: Mapping[str, Sequence[str]]) -> ChildKeyTable:
    return MappingProxyType({name: tuple(keys) for name, keys in raw.items()})


def _parse_table(document: Mapping[str, Any], source: str) -> ChildKeyTable:
    keys = document.get("keys") if isinstance(document, Mapping) else None
    if not isinstance(keys, Mapping):
        raise InvalidOptionsError([f"{source}: missing 'keys' table"])
    logger.debug(
        "Loaded %d node types from %s (grammar=%s, version=%s)",
        len(keys), source, document.get("grammar"), document.get("version"),
    )
    return _freeze_table(keys)


@functools.lru_cache(maxsize=None)
def load_default_keys() -> ChildKeyTable:
    """Load the process-wide default table (ESTree) once.

    Returns:
        Read-only mapping of node type to a tuple of child field names
    """
    text = resources.files("estreewalk").joinpath(DEFAULT_KEYS_RESOURCE).read_text(
        encoding="utf-8"
    )
    return _parse_table(json.loads(text), DEFAULT_KEYS_RESOURCE)


def load_child_keys(path: Union[str, Path]) -> ChildKeyTable:
    """Load a child-key table for another grammar from a JSON file.

    The file uses the same layout as the bundled table:
    ``{"grammar": ..., "version": ..., "keys": {type: [fields]}}``.

    Raises:
        InvalidOptionsError: If the file has no ``keys`` table
    """
    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        document = json.load(handle)
    return _parse_table(document, str(path))


class FallbackPolicy(ABC):
    """Strategy used when a node type is in neither key table."""

    @abstractmethod
    def keys_for(self, node: Mapping[str, Any], node_type: str) -> Sequence[str]:
        """Return the child field names for an unregistered node.

        Args:
            node: The node being expanded
            node_type: Its effective type

        Returns:
            Ordered field names to treat as children
        """
        pass


class ErrorFallback(FallbackPolicy):
    """Refuse to guess: unknown node types are an error (the default)."""

    def keys_for(self, node: Mapping[str, Any], node_type: str) -> Sequence[str]:
        raise UnknownNodeType(node_type)

    def __repr__(self) -> str:
        return "ErrorFallback()"


class IterationFallback(FallbackPolicy):
    """Treat every own field of the node, except ``type``, as a child."""

    def keys_for(self, node: Mapping[str, Any], node_type: str) -> Sequence[str]:
        if not isinstance(node, Mapping):
            return ()
        return tuple(key for key in node.keys() if key != TYPE_FIELD)

    def __repr__(self) -> str:
        return "IterationFallback()"


class CustomFallback(FallbackPolicy):
    """Delegate to a user function ``(node) -> field names``.

    The function is trusted. Names that don't exist on the node resolve
    to nothing and are not an error.
    """

    def __init__(self, func: Callable[[Mapping[str, Any]], Sequence[str]]):
        self.func = func

    def keys_for(self, node: Mapping[str, Any], node_type: str) -> Sequence[str]:
        return tuple(self.func(node))

    def __repr__(self) -> str:
        return f"CustomFallback({self.func!r})"


def create_fallback(value: Any = None) -> FallbackPolicy:
    """Create a fallback policy from its option value.

    Args:
        value: None or "error", "iteration", a FallbackMode, a callable,
            or an existing FallbackPolicy

    Returns:
        FallbackPolicy instance

    Raises:
        InvalidOptionsError: If the value is not recognized
    """
    if isinstance(value, FallbackPolicy):
        return value
    if isinstance(value, FallbackMode):
        value = value.value
    if value is None or (isinstance(value, str) and value.lower() == "error"):
        return ErrorFallback()
    if isinstance(value, str) and value.lower() == "iteration":
        return IterationFallback()
    if callable(value):
        return CustomFallback(value)

    raise InvalidOptionsError([
        f"unknown fallback {value!r}. "
        f"Choose from: 'error', 'iteration' or a callable"
    ])


class ChildKeyRegistry:
    """Resolves the ordered child field names of a node.

    Lookup order is the override table, then the default table, then the
    fallback policy. An override entry replaces the default list for its
    type entirely; it is not merged field by field. The default table is
    never written to.
    """

    def __init__(self,
                 overrides: Optional[ChildKeyTable] = None,
                 fallback: Any = None,
                 default_keys: Optional[ChildKeyTable] = None):
        """Initialize the registry.

        Args:
            overrides: Partial table taking precedence over the defaults
            fallback: Fallback policy or option value (see create_fallback)
            default_keys: Table to use instead of the bundled ESTree table
        """
        self._overrides = _freeze_table(overrides or {})
        self._defaults = default_keys if default_keys is not None else load_default_keys()
        self.fallback = create_fallback(fallback)

    @property
    def overrides(self) -> ChildKeyTable:
        return self._overrides

    @property
    def defaults(self) -> ChildKeyTable:
        return self._defaults

    def known_types(self) -> Tuple[str, ...]:
        """All node types with registered keys, overrides included."""
        names = dict.fromkeys(self._defaults)
        names.update(dict.fromkeys(self._overrides))
        return tuple(names)

    def lookup(self, node_type: str) -> Optional[Sequence[str]]:
        """Return the registered keys for a type, or None if unregistered."""
        if node_type in self._overrides:
            return self._overrides[node_type]
        return self._defaults.get(node_type)

    def resolve_keys(self,
                     node: Mapping[str, Any],
                     node_type: Optional[str] = None) -> Sequence[str]:
        """Resolve the child field names of a node.

        Args:
            node: The node to expand
            node_type: Its effective type (computed when omitted)

        Returns:
            Ordered child field names

        Raises:
            UnknownNodeType: If the type is unregistered and the fallback
                policy is the error policy
        """
        if node_type is None:
            node_type = effective_type(node)

        keys = self.lookup(node_type)
        if keys is not None:
            return keys

        logger.debug("No child keys for %s, using %r", node_type, self.fallback)
        return self.fallback.keys_for(node, node_type)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(overrides={len(self._overrides)}, "
                f"fallback={self.fallback!r})")
