"""Test fixtures for estreewalk consumers.

These fixtures record what a walk dispatched, so that test suites of
tools built on estreewalk can assert on visit order without writing a
Visitor subclass for every case.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..core.node import effective_type
from ..core.visitor import Visitor


class RecordingVisitor:
    """Records every node of the watched types during a walk.

    Wraps a Visitor rather than extending it: public methods of a
    Visitor subclass would be dispatched as node-type handlers.

    Example:
        recorder = RecordingVisitor(["Identifier"], options={"fallback": "iteration"})
        recorder.visit(tree)
        assert recorder.values("name") == ["decl", "a", "rest"]
    """

    def __init__(self,
                 node_types: Iterable[str],
                 options: Any = None,
                 descend: bool = False):
        """Initialize the recorder.

        Args:
            node_types: Node types to record (each gets a handler)
            options: Visitor options, as for Visitor
            descend: Also visit the children of recorded nodes
        """
        self.descend = descend
        self.records: List[Tuple[str, Mapping[str, Any]]] = []
        self.visitor = Visitor({name: self._record for name in node_types}, options)

    def _record(self, node: Mapping[str, Any]) -> None:
        self.records.append((effective_type(node), node))
        if self.descend:
            self.visitor.visit_children(node)

    def visit(self, node: Optional[Mapping[str, Any]]) -> None:
        self.visitor.visit(node)

    def visit_children(self, node: Optional[Mapping[str, Any]]) -> None:
        self.visitor.visit_children(node)

    def types_seen(self) -> List[str]:
        """Types of the recorded nodes, in visit order."""
        return [name for name, _ in self.records]

    def values(self, field: str, default: Optional[Any] = None) -> List[Any]:
        """A field of each recorded node, in visit order."""
        return [node.get(field, default) for _, node in self.records]

    def reset(self) -> None:
        """Forget everything recorded so far."""
        self.records.clear()
