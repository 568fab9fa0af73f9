"""
Structure errors.

Every error also derives from the matching builtin, so callers can catch
either `InvalidInput` or plain `TypeError`.
"""


class StructureError(Exception):
    """Base class for all structure errors."""


class InvalidInput(StructureError, TypeError):
    """An element, scalar or operand is not numeric."""


class DimensionMismatch(StructureError, ValueError):
    """Operands have incompatible lengths."""


class IndexOutOfRange(StructureError, IndexError):
    """No element at the requested index."""


class ImmutableMutation(StructureError, TypeError):
    """Attempted write or delete on a read-only structure."""
