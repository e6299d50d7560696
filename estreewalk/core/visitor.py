"""The Visitor: estreewalk's traversal engine.

A Visitor bundles a child-key registry (override table plus fallback
policy) with a handler table, and walks trees depth-first, pre-order.

A handler registered for a node type *replaces* default recursion into
that node. Handlers that still want the node's children visited call
``visit_children`` themselves.

Example:
    >>> class Names(Visitor):
    ...     def __init__(self):
    ...         super().__init__(options={"fallback": "iteration"})
    ...         self.names = []
    ...
    ...     def Identifier(self, node):
    ...         self.names.append(node["name"])
    ...
    ...     def BlockStatement(self, node):
    ...         pass  # don't look inside blocks
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Set

from ..config import VisitorOptions
from .dispatch import HandlerSet, collect_method_handlers, find_handler, layer_handlers
from .keys import ChildKeyRegistry, is_property_container
from .node import child_value, effective_type, iter_child_nodes

logger = logging.getLogger(__name__)


class Visitor:
    """Reusable, extensible handler container and tree walker.

    The handler table is built once, at construction, from an optional
    seed mapping layered under the public methods of the subclass.
    Method names are the node types they handle; a method wins over a
    seed entry for the same type.

    A Visitor may be reused for any number of sequential walks. It is
    not safe to walk with the same instance from several threads.
    """

    def __init__(self, handlers: Optional[HandlerSet] = None, options: Any = None):
        """Initialize the visitor.

        Args:
            handlers: Seed mapping of node type to handler ``(node) -> Any``
            options: VisitorOptions, a mapping with ``fallback`` /
                ``childVisitorKeys``, or None for the defaults

        Raises:
            InvalidOptionsError: If the options can't be understood
        """
        self.options = VisitorOptions.coerce(options)
        self._registry = ChildKeyRegistry(
            overrides=self.options.child_visitor_keys,
            fallback=self.options.fallback,
        )
        self._handlers = layer_handlers(handlers, collect_method_handlers(self, Visitor))
        # ids of nodes whose children are being visited right now
        self._expanding: Set[int] = set()

    @property
    def handlers(self) -> Mapping[str, Any]:
        """Read-only view of the handler table."""
        return MappingProxyType(self._handlers)

    @property
    def registry(self) -> ChildKeyRegistry:
        return self._registry

    def visit(self, node: Optional[Mapping[str, Any]]) -> None:
        """Visit a node.

        Calls the handler registered for the node's effective type, or
        visits its children when there is none. None is a no-op.
        """
        if node is None:
            return

        handler = find_handler(node, self._handlers)
        if handler is not None:
            handler(node)
            return

        self.visit_children(node)

    def visit_children(self, node: Optional[Mapping[str, Any]]) -> None:
        """Visit the children of a node, in child-key order.

        Raises:
            UnknownNodeType: If the node's type has no child keys and the
                fallback policy is the error policy
        """
        if node is None:
            return

        node_type = effective_type(node)
        keys = self._registry.resolve_keys(node, node_type)

        marker = id(node)
        added = marker not in self._expanding
        self._expanding.add(marker)
        try:
            for key in keys:
                as_property = is_property_container(node_type, key)
                for child in iter_child_nodes(child_value(node, key), as_property):
                    if id(child) in self._expanding:
                        logger.debug(
                            "Skipping %s.%s: it points back to a node being visited",
                            node_type, key,
                        )
                        continue
                    self.visit(child)
        finally:
            if added:
                self._expanding.discard(marker)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(handlers={sorted(self._handlers)!r}, "
                f"registry={self._registry!r})")
