"""
structures — Immutable Numeric Containers
=========================================

Basic data structures for the numeric / ML code of the framework:

    structures.Vector.build(values, validate=True)
        → 1-D read-only vector of ints/floats. Element-wise arithmetic,
          scalar broadcast, norms, map/reduce. Every op returns a new Vector.

    structures.Matrix
        → m x n read-only container built by Vector.as_row_matrix(),
          Vector.as_column_matrix() and Vector.outer().

Errors (structures.errors):
    InvalidInput, DimensionMismatch, IndexOutOfRange, ImmutableMutation
    all derive from StructureError and the matching builtin.

Config:
    structures.config.get('comparison.rtol')
"""

__version__ = '0.1.0'

from structures.errors import (
    StructureError,
    InvalidInput,
    DimensionMismatch,
    IndexOutOfRange,
    ImmutableMutation,
)
from structures.vector import Vector, is_numeric
from structures.matrix import Matrix
from structures import config

__all__ = [
    'Vector',
    'Matrix',
    'is_numeric',
    'config',
    'StructureError',
    'InvalidInput',
    'DimensionMismatch',
    'IndexOutOfRange',
    'ImmutableMutation',
]
