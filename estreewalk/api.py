"""High-level API for estreewalk.

This module provides simple, functional interfaces for common walks.
These functions wrap the Visitor class for ease of use in simple cases.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .core.dispatch import HandlerSet
from .core.node import effective_type
from .core.visitor import Visitor
from .errors import InvalidOptionsError

Node = Mapping[str, Any]
NodePredicate = Union[str, Callable[[Node], bool]]


def visit(node: Optional[Node],
          handlers: Union[HandlerSet, Visitor, None] = None,
          options: Any = None) -> None:
    """Walk a tree, calling handlers keyed by node type.

    This is the primary high-level function. A handler registered for a
    node's type replaces default recursion into that node; nodes without
    a handler have their children visited.

    Args:
        node: Root of the tree (None is a no-op)
        handlers: Mapping of node type to handler, or a Visitor instance
        options: VisitorOptions or a mapping with ``fallback`` and
            ``childVisitorKeys``

    Raises:
        UnknownNodeType: If a node type has no child keys and no fallback
            was configured
        InvalidOptionsError: If the options can't be understood

    Example:
        >>> names = []
        >>> visit(tree, {"Identifier": lambda node: names.append(node["name"])})
    """
    _visitor_for(handlers, options).visit(node)


def visit_children(node: Optional[Node],
                   handlers: Union[HandlerSet, Visitor, None] = None,
                   options: Any = None) -> None:
    """Visit only the children of a node (see visit)."""
    _visitor_for(handlers, options).visit_children(node)


def find_nodes(node: Optional[Node],
               predicate: NodePredicate,
               options: Any = None) -> List[Node]:
    """Find every node matching a type name or predicate.

    The walk continues into matched nodes, so nested matches are found.

    Args:
        node: Root of the tree
        predicate: Node type name, or function returning True for matches
        options: Visitor options (see visit)

    Returns:
        Matching nodes in visit order (depth-first, pre-order)

    Example:
        >>> calls = find_nodes(program, "CallExpression")
    """
    if isinstance(predicate, str):
        node_type = predicate
        predicate = lambda candidate: effective_type(candidate) == node_type

    found: List[Node] = []

    def on_node(candidate: Node) -> None:
        if predicate(candidate):
            found.append(candidate)

    _EveryNodeVisitor(on_node, options).visit(node)
    return found


def count_nodes(node: Optional[Node],
                node_type: Optional[str] = None,
                options: Any = None) -> int:
    """Count nodes in a tree, optionally only those of one type.

    Example:
        >>> count_nodes(program, "Identifier")
        3
    """
    if node_type is None:
        return sum(node_type_counts(node, options).values())
    return len(find_nodes(node, node_type, options))


def node_type_counts(node: Optional[Node], options: Any = None) -> Dict[str, int]:
    """Count the nodes of each effective type in a tree.

    Returns:
        Mapping of type name to count, in order of first appearance
    """
    counts: Dict[str, int] = {}

    def on_node(candidate: Node) -> None:
        name = effective_type(candidate)
        counts[name] = counts.get(name, 0) + 1

    _EveryNodeVisitor(on_node, options).visit(node)
    return counts


# Helper functions

class _EveryNodeVisitor(Visitor):
    """Visitor that reports every node and always recurses."""

    def __init__(self, on_node: Callable[[Node], None], options: Any = None):
        super().__init__(options=options)
        self._on_node = on_node

    def visit(self, node: Optional[Node]) -> None:
        if node is None:
            return
        self._on_node(node)
        self.visit_children(node)


def _visitor_for(handlers: Union[HandlerSet, Visitor, None], options: Any) -> Visitor:
    """Use a ready Visitor as-is or build one from a handler mapping."""
    if isinstance(handlers, Visitor):
        if options is not None:
            raise InvalidOptionsError(
                ["options can't be combined with a Visitor instance; "
                 "pass them to the Visitor constructor instead"]
            )
        return handlers
    return Visitor(handlers, options)
