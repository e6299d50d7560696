"""Testing utilities for estreewalk consumers."""

from .fixtures import RecordingVisitor

__all__ = ['RecordingVisitor']
