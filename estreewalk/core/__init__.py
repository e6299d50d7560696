"""Core abstractions for estreewalk.

This package contains the node model, the child-key registry, handler
dispatch and the Visitor that ties them together.
"""

from .node import PROPERTY_TYPE, ChildKind, classify_child, effective_type, is_node
from .keys import (
    ChildKeyRegistry,
    FallbackPolicy,
    ErrorFallback,
    IterationFallback,
    CustomFallback,
    create_fallback,
    load_child_keys,
    load_default_keys,
)
from .dispatch import find_handler, layer_handlers
from .visitor import Visitor

__all__ = [
    "PROPERTY_TYPE",
    "ChildKind",
    "classify_child",
    "effective_type",
    "is_node",
    "ChildKeyRegistry",
    "FallbackPolicy",
    "ErrorFallback",
    "IterationFallback",
    "CustomFallback",
    "create_fallback",
    "load_child_keys",
    "load_default_keys",
    "find_handler",
    "layer_handlers",
    "Visitor",
]
