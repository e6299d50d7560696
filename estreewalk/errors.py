"""Exceptions raised by estreewalk.

Traversal errors are never recovered inside the walk; they propagate
synchronously out of ``visit`` / ``visit_children`` to the caller.
"""

from typing import List, Optional


class EstreeWalkError(Exception):
    """Base class for all estreewalk errors."""
    pass


class UnknownNodeType(EstreeWalkError):
    """Raised when no child keys are known for a node type.

    The type was found in neither the override table nor the default
    table, and the active fallback policy is the error policy.
    """

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unknown node type {node_type}.")


class InvalidOptionsError(EstreeWalkError, ValueError):
    """Raised when visitor options can't be understood."""

    def __init__(self, problems: List[str], message: Optional[str] = None):
        self.problems = list(problems)
        super().__init__(
            message or f"Invalid visitor options: {'; '.join(self.problems)}"
        )
