"""
Matrix: read-only m x n container of numeric elements.

Built by Vector.as_row_matrix(), Vector.as_column_matrix() and
Vector.outer(). Holds values only; no matrix arithmetic.
"""

import logging
from typing import Any, Iterable, Iterator, List, Tuple

import numpy as np

from structures.errors import (
    DimensionMismatch,
    ImmutableMutation,
    IndexOutOfRange,
    InvalidInput,
)
from structures.vector import Number, Vector, is_numeric

logger = logging.getLogger(__name__)

_ROW_TYPES = (list, tuple, np.ndarray, Vector)


class Matrix:
    """Two-dimensional numeric container. Rows are exposed as Vectors."""

    __array_ufunc__ = None

    __slots__ = ('_a',)

    @classmethod
    def build(cls, rows: Iterable[Iterable[Number]], validate: bool = True) -> 'Matrix':
        return cls(rows, validate)

    @classmethod
    def _wrap(cls, a: np.ndarray) -> 'Matrix':
        """Adopt an already-numeric 2-D array without copying or validating."""
        m = cls.__new__(cls)
        a.flags.writeable = False
        m._a = a
        return m

    def __init__(self, rows: Iterable[Iterable[Number]], validate: bool = True):
        rows = [list(row) for row in self._rows(rows, validate)]

        if not rows:
            a = np.empty((0, 0), dtype=np.float64)
        else:
            try:
                a = np.array(rows)
            except ValueError as e:
                raise DimensionMismatch(f"Matrix rows must all have the same length: {e}") from e

        if a.ndim != 2:
            raise DimensionMismatch(f"Matrix must be two-dimensional, got shape {a.shape}.")
        if a.dtype == np.bool_:
            a = a.astype(np.int64)
        if a.dtype.kind not in 'iuf':
            raise InvalidInput(f"Matrix elements must be integers or floats, dtype {a.dtype} found.")

        a.flags.writeable = False
        self._a = a

    @staticmethod
    def _rows(rows: Iterable[Any], validate: bool) -> List[Any]:
        rows = list(rows)
        if not validate:
            return rows

        width = None
        for i, row in enumerate(rows):
            if not isinstance(row, _ROW_TYPES):
                raise InvalidInput(f"Matrix row must be a sequence, {type(row).__name__} found at row {i}.")
            values = list(row)
            if width is None:
                width = len(values)
            elif len(values) != width:
                raise DimensionMismatch(
                    f"Matrix rows must all have the same length, row {i} has {len(values)}, expected {width}."
                )
            for j, value in enumerate(values):
                if not is_numeric(value):
                    logger.debug(f"Rejected matrix element {value!r} at ({i}, {j})")
                    raise InvalidInput(
                        f"Matrix element must be an integer or float, "
                        f"{type(value).__name__} found at ({i}, {j})."
                    )
        return rows

    def m(self) -> int:
        """Number of rows."""
        return self._a.shape[0]

    def n(self) -> int:
        """Number of columns."""
        return self._a.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._a.shape

    def as_array(self) -> np.ndarray:
        return self._a

    def to_list(self) -> List[List[Number]]:
        return self._a.tolist()

    def row(self, i: int) -> Vector:
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)) or not 0 <= i < self.m():
            raise IndexOutOfRange(f"Row not found at index {i!r}.")
        return Vector._wrap(self._a[i])

    def column(self, j: int) -> Vector:
        if isinstance(j, (bool, np.bool_)) or not isinstance(j, (int, np.integer)) or not 0 <= j < self.n():
            raise IndexOutOfRange(f"Column not found at index {j!r}.")
        return Vector._wrap(self._a[:, j])

    def __len__(self) -> int:
        return self.m()

    def __getitem__(self, i: int) -> Vector:
        return self.row(i)

    def __setitem__(self, i, value):
        raise ImmutableMutation("Matrix cannot be mutated directly.")

    def __delitem__(self, i):
        raise ImmutableMutation("Matrix cannot be mutated directly.")

    def __iter__(self) -> Iterator[Vector]:
        for i in range(self.m()):
            yield Vector._wrap(self._a[i])

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self._a, dtype=dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._a, other._a))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"
