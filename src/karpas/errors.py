"""Exceptions raised by the engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine errors."""


class OutOfBounds(EngineError, IndexError):
    """A grid accessor was called with coordinates outside the field.

    This is a caller bug rather than a gameplay condition and is never caught
    by the engine.
    """


class RotationRejected(EngineError):
    """Every kick offset for a rotation collided."""


class SpawnBlocked(EngineError):
    """The next piece cannot be placed; the session ends."""
