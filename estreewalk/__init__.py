"""estreewalk - handler-driven walker for ESTree-shaped syntax trees.

estreewalk walks trees of plain mappings (as produced by JavaScript
parsers that emit ESTree) and calls handlers keyed by node type, so
that linters, analyzers and transformers don't need hand-written
per-grammar recursion.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Plain handlers:
    from estreewalk import visit
    visit(tree, {"Identifier": lambda node: print(node["name"])})

Reusable visitors:
    from estreewalk import Visitor
    class Names(Visitor):
        def Identifier(self, node): ...
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .errors import EstreeWalkError, UnknownNodeType, InvalidOptionsError
from .config import FallbackMode, VisitorOptions
from .core import (
    PROPERTY_TYPE,
    ChildKeyRegistry,
    FallbackPolicy,
    ErrorFallback,
    IterationFallback,
    CustomFallback,
    create_fallback,
    load_child_keys,
    load_default_keys,
    effective_type,
    is_node,
    find_handler,
    layer_handlers,
    Visitor,
)
from .api import visit, visit_children, find_nodes, count_nodes, node_type_counts

__all__ = [
    "__version__",
    # Errors
    "EstreeWalkError",
    "UnknownNodeType",
    "InvalidOptionsError",
    # Config
    "FallbackMode",
    "VisitorOptions",
    # Core
    "PROPERTY_TYPE",
    "ChildKeyRegistry",
    "FallbackPolicy",
    "ErrorFallback",
    "IterationFallback",
    "CustomFallback",
    "create_fallback",
    "load_child_keys",
    "load_default_keys",
    "effective_type",
    "is_node",
    "find_handler",
    "layer_handlers",
    "Visitor",
    # API
    "visit",
    "visit_children",
    "find_nodes",
    "count_nodes",
    "node_type_counts",
]
