"""Handler dispatch for estreewalk.

Handlers are looked up by exact node-type name in a plain mapping.
There is no inheritance between node types and no wildcard matching.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from .node import effective_type

Handler = Callable[[Mapping[str, Any]], Any]
HandlerSet = Mapping[str, Handler]


def find_handler(node: Mapping[str, Any], handlers: HandlerSet) -> Optional[Handler]:
    """Find the handler registered for a node's effective type.

    Args:
        node: The node being visited
        handlers: Mapping of node-type name to handler

    Returns:
        The handler, or None if nothing callable is registered
    """
    handler = handlers.get(effective_type(node))
    if handler is None or not callable(handler):
        return None
    return handler


def layer_handlers(*layers: Optional[HandlerSet]) -> Dict[str, Handler]:
    """Build a handler mapping from layers, later layers winning.

    Example:
        >>> base = {"Identifier": on_ident, "Literal": on_literal}
        >>> layer_handlers(base, {"Literal": on_other_literal})
        {'Identifier': on_ident, 'Literal': on_other_literal}
    """
    merged: Dict[str, Handler] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def collect_method_handlers(obj: Any, base: type) -> Dict[str, Handler]:
    """Collect handler methods defined on a subclass of ``base``.

    Method names are the node types they handle (case-sensitive).
    Attributes of ``base`` itself and underscore-prefixed names are
    never handlers. Subclasses override their own bases.

    Args:
        obj: Instance whose class extends ``base``
        base: The class that defines the public visitor surface

    Returns:
        Mapping of node-type name to bound method
    """
    reserved = set(dir(base))
    handlers: Dict[str, Handler] = {}

    for cls in reversed(type(obj).__mro__):
        if not issubclass(cls, base) or cls is base:
            continue
        for name, attr in vars(cls).items():
            if name.startswith("_") or name in reserved:
                continue
            if callable(attr) and not isinstance(attr, (type, property)):
                handlers[name] = getattr(obj, name)

    return handlers
