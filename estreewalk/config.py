"""Configuration system for estreewalk.

This module defines how callers specify the per-traversal options:
which fallback to apply to node types the key tables don't know, and
which child keys to override for specific node types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union

from .errors import InvalidOptionsError


class FallbackMode(Enum):
    """What to do when a node type has no registered child keys."""
    ERROR = "error"            # Raise UnknownNodeType (default)
    ITERATION = "iteration"    # Use the node's own field names
    CUSTOM = "custom"          # Ask a user function for the field names


# Option names accepted by VisitorOptions.from_mapping
_MAPPING_KEYS = {
    "fallback": "fallback",
    "childVisitorKeys": "child_visitor_keys",
    "child_visitor_keys": "child_visitor_keys",
}


@dataclass
class VisitorOptions:
    """Options for a single traversal (or a single Visitor).

    ``fallback`` may be None (error), ``"error"``, ``"iteration"``, a
    FallbackMode, a callable ``(node) -> field names`` or a ready-made
    FallbackPolicy instance. ``child_visitor_keys`` is merged over the
    default table per type: an entry fully replaces the default list.
    """

    fallback: Union[None, str, FallbackMode, Callable[[Any], Sequence[str]], Any] = None
    child_visitor_keys: Dict[str, Sequence[str]] = field(default_factory=dict)

    @property
    def mode(self) -> FallbackMode:
        """The kind of fallback this configuration selects."""
        fallback = self.fallback
        if fallback is None:
            return FallbackMode.ERROR
        if isinstance(fallback, FallbackMode):
            return fallback
        if isinstance(fallback, str):
            return FallbackMode(fallback.lower())

        # core.keys imports this module
        from .core.keys import ErrorFallback, IterationFallback
        if isinstance(fallback, ErrorFallback):
            return FallbackMode.ERROR
        if isinstance(fallback, IterationFallback):
            return FallbackMode.ITERATION
        return FallbackMode.CUSTOM

    # Convenience constructors for common configurations

    @classmethod
    def iteration(cls, **child_visitor_keys: Sequence[str]) -> 'VisitorOptions':
        """Create options that fall back to the node's own fields."""
        return cls(fallback=FallbackMode.ITERATION,
                   child_visitor_keys=dict(child_visitor_keys))

    @classmethod
    def with_keys(cls, **child_visitor_keys: Sequence[str]) -> 'VisitorOptions':
        """Create options that only override child keys."""
        return cls(child_visitor_keys=dict(child_visitor_keys))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'VisitorOptions':
        """Build options from a plain mapping.

        Accepts ``fallback`` and ``childVisitorKeys`` (or
        ``child_visitor_keys``).

        Raises:
            InvalidOptionsError: On unrecognized option names or invalid values
        """
        unknown = [key for key in mapping if key not in _MAPPING_KEYS]
        if unknown:
            raise InvalidOptionsError(
                [f"unknown option {key!r}" for key in sorted(unknown)]
            )

        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            kwargs[_MAPPING_KEYS[key]] = value
        if kwargs.get("child_visitor_keys") is None:
            kwargs.pop("child_visitor_keys", None)

        options = cls(**kwargs)
        options.check()
        return options

    @classmethod
    def coerce(cls, value: Any) -> 'VisitorOptions':
        """Turn None, a mapping or a VisitorOptions into VisitorOptions."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            value.check()
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise InvalidOptionsError(
            [f"options must be a mapping or VisitorOptions, got {type(value).__name__}"]
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Check fallback
        fallback = self.fallback
        if isinstance(fallback, str):
            try:
                mode = FallbackMode(fallback.lower())
            except ValueError:
                errors.append(f"unknown fallback {fallback!r}")
            else:
                # Only a callable makes a fallback custom
                if mode is FallbackMode.CUSTOM:
                    errors.append("fallback 'custom' needs a callable, not the string")
        elif self.mode == FallbackMode.CUSTOM and not callable(fallback) \
                and not hasattr(fallback, "keys_for"):
            errors.append("fallback must be 'iteration', 'error' or a callable")

        # Check key overrides
        if not isinstance(self.child_visitor_keys, Mapping):
            errors.append("child_visitor_keys must be a mapping")
            return errors

        for node_type, keys in self.child_visitor_keys.items():
            if not isinstance(node_type, str) or not node_type:
                errors.append(f"node type {node_type!r} must be a non-empty string")
            if isinstance(keys, (str, bytes)) or not isinstance(keys, Sequence):
                errors.append(f"child keys for {node_type!r} must be a list of field names")
                continue
            for key in keys:
                if not isinstance(key, str):
                    errors.append(f"child key {key!r} of {node_type!r} must be a string")

        return errors

    def check(self) -> None:
        """Raise InvalidOptionsError if validate() reports any problem."""
        errors = self.validate()
        if errors:
            raise InvalidOptionsError(errors)
