"""
Vector
======
One-dimensional, immutable tensor of integer and/or float elements.

Values live in a read-only numpy array. Every operation returns a new
Vector (or a float, or a Matrix for shape conversions); nothing is mutated
in place.

    a = Vector.build([1, 2, 3])
    b = Vector.build([4, 5, 6])
    a.dot(b)                → 32.0
    a.add(b).to_list()      → [5, 7, 9]
    a.outer(b).shape        → (3, 3)

Floating-point domain results (x / 0, sqrt(-1), log(0)) follow IEEE-754
under the numpy error state in config 'float_errors'.
"""

import logging
import math
from functools import reduce
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

import numpy as np

from structures import config
from structures.errors import (
    DimensionMismatch,
    ImmutableMutation,
    IndexOutOfRange,
    InvalidInput,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]


def is_numeric(value: Any) -> bool:
    """True for int, float and numpy integer/floating scalars."""
    if isinstance(value, (bool, np.bool_)):
        return bool(config.get('elements.allow_bool', False))
    return isinstance(value, (int, float, np.integer, np.floating))


_INT64_MIN = -2 ** 63
_INT64_MAX = 2 ** 63 - 1

# integer results at or above this magnitude are returned as float64
_INT_LIMIT = float(2 ** 62)


def _fits_int64(value: Any) -> bool:
    return _INT64_MIN <= value <= _INT64_MAX


def _as_array(values: List[Any]) -> np.ndarray:
    if not values:
        return np.array([], dtype=np.float64)
    # Python ints beyond int64 become floats, as in float promotion on overflow
    if any(isinstance(v, int) and not _fits_int64(v) for v in values):
        return np.array(values, dtype=np.float64)
    return np.array(values)


def _freeze(a: np.ndarray) -> np.ndarray:
    """Normalize to int64 or a float dtype and mark read-only."""
    if a.dtype == np.bool_:
        a = a.astype(np.int64)
    elif a.dtype.kind == 'u':
        a = a.astype(np.int64) if a.size == 0 or a.max() <= _INT64_MAX else a.astype(np.float64)
    elif a.dtype.kind == 'i' and a.dtype != np.int64:
        a = a.astype(np.int64)
    if a.dtype.kind not in 'if':
        raise InvalidInput(f"Vector elements must be integers or floats, dtype {a.dtype} found.")
    a.flags.writeable = False
    return a


def _int_safe(op: Callable, *operands: Any) -> np.ndarray:
    """
    Apply op without silent int64 wraparound.

    Integer-only operands are evaluated in float64 first. The integer result
    is kept only when every element stays below 2**62 in magnitude, otherwise
    the float64 result is returned.
    """
    if not all(np.asarray(x).dtype.kind in 'iu' for x in operands):
        return op(*operands)
    wide = op(*(np.asarray(x, dtype=np.float64) for x in operands))
    if np.all(np.abs(wide) < _INT_LIMIT):
        return op(*operands)
    return wide


class Vector:
    """
    Fixed-length ordered sequence of numeric scalars.

    Indexed reads only: writes and deletes raise ImmutableMutation,
    missing indices raise IndexOutOfRange.
    """

    # numpy defers binary operators to us instead of broadcasting over the object
    __array_ufunc__ = None

    __slots__ = ('_a', '_n')

    @classmethod
    def build(cls, values: Iterable[Number], validate: bool = True) -> 'Vector':
        """Factory method to build a new vector from a sequence."""
        return cls(values, validate)

    @staticmethod
    def _check_length(n: Any) -> None:
        if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
            raise InvalidInput(f"Vector length must be an integer, {type(n).__name__} given.")
        if n < 0:
            raise InvalidInput(f"Vector length must be non-negative, {n} given.")

    @classmethod
    def zeros(cls, n: int) -> 'Vector':
        """Vector of n zeros."""
        cls._check_length(n)
        return cls._wrap(np.zeros(n, dtype=np.int64))

    @classmethod
    def ones(cls, n: int) -> 'Vector':
        """Vector of n ones."""
        cls._check_length(n)
        return cls._wrap(np.ones(n, dtype=np.int64))

    @classmethod
    def _wrap(cls, a: np.ndarray) -> 'Vector':
        """Adopt an already-numeric 1-D array without copying or validating."""
        v = cls.__new__(cls)
        v._a = _freeze(a)
        v._n = v._a.shape[0]
        return v

    def __init__(self, values: Iterable[Number], validate: bool = True):
        values = list(values)

        if validate:
            for i, value in enumerate(values):
                if not is_numeric(value):
                    logger.debug(f"Rejected vector element {value!r} at index {i}")
                    raise InvalidInput(
                        f"Vector element must be an integer or float, "
                        f"{type(value).__name__} found at index {i}."
                    )

        try:
            a = _as_array(values)
        except ValueError as e:
            raise InvalidInput(f"Vector values do not form a numeric sequence: {e}") from e
        if a.ndim != 1:
            raise InvalidInput(f"Vector must be one-dimensional, got shape {a.shape}.")

        self._a = _freeze(a)
        self._n = len(values)

    # -----------------------------------------------------------------
    # Access
    # -----------------------------------------------------------------

    def n(self) -> int:
        """Number of elements, i.e. the dimensionality."""
        return self._n

    def as_array(self) -> np.ndarray:
        """The underlying read-only array."""
        return self._a

    def to_list(self) -> List[Number]:
        return self._a.tolist()

    def has(self, index: Any) -> bool:
        """Whether an element exists at index."""
        if isinstance(index, (bool, np.bool_)):
            return False
        return isinstance(index, (int, np.integer)) and 0 <= index < self._n

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, index: int) -> Number:
        if not self.has(index):
            raise IndexOutOfRange(f"Element not found at index {index!r}.")
        return self._a[index].item()

    def __setitem__(self, index, value):
        raise ImmutableMutation("Vector cannot be mutated directly.")

    def __delitem__(self, index):
        raise ImmutableMutation("Vector cannot be mutated directly.")

    def __iter__(self) -> Iterator[Number]:
        for value in self._a:
            yield value.item()

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self._a, dtype=dtype)

    def __repr__(self) -> str:
        return f"Vector({self.to_list()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._n == other._n and bool(np.array_equal(self._a, other._a))

    __hash__ = None

    def allclose(self, b: 'Vector', rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
        """Element-wise equality within tolerance (defaults from config 'comparison')."""
        self._check_operand(b)
        if rtol is None:
            rtol = config.get('comparison.rtol', 1e-09)
        if atol is None:
            atol = config.get('comparison.atol', 0.0)
        return bool(np.allclose(self._a, b._a, rtol=rtol, atol=atol))

    # -----------------------------------------------------------------
    # Shape conversion
    # -----------------------------------------------------------------

    def as_row_matrix(self):
        """This vector as a 1 x n matrix."""
        from structures.matrix import Matrix
        return Matrix._wrap(self._a.reshape(1, self._n))

    def as_column_matrix(self):
        """This vector as an n x 1 matrix."""
        from structures.matrix import Matrix
        return Matrix._wrap(self._a.reshape(self._n, 1))

    # -----------------------------------------------------------------
    # Functional
    # -----------------------------------------------------------------

    def map(self, fn: Callable[[Number], Number]) -> 'Vector':
        """Apply fn to each element. The result is validated."""
        return Vector([fn(value) for value in self])

    def reduce(self, fn: Callable[[Any, Number], Any], initial: Any = 0.0) -> Any:
        """Left fold fn(carry, value) over the elements, starting at initial."""
        return reduce(fn, self, initial)

    # -----------------------------------------------------------------
    # Vector-vector
    # -----------------------------------------------------------------

    def _check_operand(self, b: Any) -> None:
        if not isinstance(b, Vector):
            raise InvalidInput(f"Operand must be a Vector, {type(b).__name__} found.")
        if b._n != self._n:
            raise DimensionMismatch(
                f"Vectors do not have the same dimensionality, {self._n} and {b._n}."
            )

    def dot(self, b: 'Vector') -> float:
        """Dot product: sum of pairwise products."""
        self._check_operand(b)
        with np.errstate(**config.float_errstate()):
            return float(np.dot(self._a.astype(np.float64), b._a.astype(np.float64)))

    def inner(self, b: 'Vector') -> float:
        """Alias of dot()."""
        return self.dot(b)

    def outer(self, b: 'Vector'):
        """Outer product as an n x m matrix; lengths may differ."""
        from structures.matrix import Matrix
        if not isinstance(b, Vector):
            raise InvalidInput(f"Operand must be a Vector, {type(b).__name__} found.")
        with np.errstate(**config.float_errstate()):
            return Matrix._wrap(_int_safe(np.multiply.outer, self._a, b._a))

    def multiply(self, b: 'Vector') -> 'Vector':
        self._check_operand(b)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.multiply, self._a, b._a))

    def divide(self, b: 'Vector') -> 'Vector':
        self._check_operand(b)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(self._a / b._a)

    def add(self, b: 'Vector') -> 'Vector':
        self._check_operand(b)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.add, self._a, b._a))

    def subtract(self, b: 'Vector') -> 'Vector':
        self._check_operand(b)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.subtract, self._a, b._a))

    # -----------------------------------------------------------------
    # Vector-scalar
    # -----------------------------------------------------------------

    @staticmethod
    def _scalar(scalar: Any) -> Number:
        """Check a scalar operand; ints beyond int64 are promoted to float."""
        if not is_numeric(scalar):
            raise InvalidInput(
                f"Scalar must be an integer or float, {type(scalar).__name__} found."
            )
        if isinstance(scalar, int) and not _fits_int64(scalar):
            try:
                return float(scalar)
            except OverflowError:
                return math.inf if scalar > 0 else -math.inf
        return scalar

    def multiply_scalar(self, scalar: Number) -> 'Vector':
        scalar = self._scalar(scalar)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.multiply, self._a, scalar))

    def divide_scalar(self, scalar: Number) -> 'Vector':
        scalar = self._scalar(scalar)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(self._a / scalar)

    def add_scalar(self, scalar: Number) -> 'Vector':
        scalar = self._scalar(scalar)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.add, self._a, scalar))

    def subtract_scalar(self, scalar: Number) -> 'Vector':
        scalar = self._scalar(scalar)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.subtract, self._a, scalar))

    # -----------------------------------------------------------------
    # Element-wise unary
    # -----------------------------------------------------------------

    def abs(self) -> 'Vector':
        return Vector._wrap(_int_safe(np.abs, self._a))

    def square(self) -> 'Vector':
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.square, self._a))

    def sqrt(self) -> 'Vector':
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(np.sqrt(self._a))

    def exp(self) -> 'Vector':
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(np.exp(self._a))

    def log(self, base: Optional[Number] = None) -> 'Vector':
        """Logarithm of each element; natural log unless base is given."""
        if base is None:
            base = config.get('log.default_base', math.e)
        base = self._scalar(base)
        with np.errstate(**config.float_errstate()):
            if base == math.e:
                return Vector._wrap(np.log(self._a))
            return Vector._wrap(np.log(self._a) / np.log(base))

    # -----------------------------------------------------------------
    # Aggregates, accumulated in float64
    # -----------------------------------------------------------------

    def _empty(self, name: str) -> float:
        logger.debug(f"{name}() of an empty vector is NaN")
        return float('nan')

    def sum(self) -> float:
        with np.errstate(**config.float_errstate()):
            return float(np.sum(self._a, dtype=np.float64))

    def product(self) -> float:
        with np.errstate(**config.float_errstate()):
            return float(np.prod(self._a, dtype=np.float64))

    def min(self) -> float:
        if self._n == 0:
            return self._empty('min')
        return float(np.min(self._a))

    def max(self) -> float:
        if self._n == 0:
            return self._empty('max')
        return float(np.max(self._a))

    def mean(self) -> float:
        if self._n == 0:
            return self._empty('mean')
        return self.sum() / self._n

    def l1_norm(self) -> float:
        """L1 or Manhattan norm."""
        with np.errstate(**config.float_errstate()):
            return float(np.sum(np.abs(self._a.astype(np.float64))))

    def l2_norm(self) -> float:
        """L2 or Euclidean norm."""
        with np.errstate(**config.float_errstate()):
            return float(np.sqrt(np.sum(np.square(self._a.astype(np.float64)))))

    def max_norm(self) -> float:
        """Max or Chebyshev norm: largest absolute value."""
        if self._n == 0:
            return self._empty('max_norm')
        return float(np.max(np.abs(self._a.astype(np.float64))))

    # -----------------------------------------------------------------
    # Operators: Vector operands go element-wise, numbers broadcast
    # -----------------------------------------------------------------

    def __add__(self, other):
        if isinstance(other, Vector):
            return self.add(other)
        if is_numeric(other):
            return self.add_scalar(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return self.subtract(other)
        if is_numeric(other):
            return self.subtract_scalar(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Vector):
            return self.multiply(other)
        if is_numeric(other):
            return self.multiply_scalar(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Vector):
            return self.divide(other)
        if is_numeric(other):
            return self.divide_scalar(other)
        return NotImplemented

    __radd__ = __add__
    __rmul__ = __mul__

    def __rsub__(self, other):
        if not is_numeric(other):
            return NotImplemented
        other = self._scalar(other)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(_int_safe(np.subtract, other, self._a))

    def __rtruediv__(self, other):
        if not is_numeric(other):
            return NotImplemented
        other = self._scalar(other)
        with np.errstate(**config.float_errstate()):
            return Vector._wrap(other / self._a)

    def __matmul__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dot(other)

    def __neg__(self) -> 'Vector':
        return Vector._wrap(_int_safe(np.negative, self._a))

    def __abs__(self) -> 'Vector':
        return self.abs()
