"""
Fixed-dimension vector type for 3D math operations.

This is the fundamental building block of the ray tracer, used for:
- Points in 3D space
- Direction vectors
- RGB color values

The dimension and scalar type are class parameters. ``vector_type(n)``
returns the concrete class for dimension ``n``; ``Vec2`` and ``Vec3`` are
the ones the renderer uses.
"""

from __future__ import annotations
import math
from typing import Dict, Iterator, Tuple, Union
import numpy as np

Scalar = Union[int, float]


class Vector:
    """A vector with a fixed number of components.

    Uses numpy internally for storage while providing value semantics:
    every operator returns a new vector, only the in-place operators and
    ``normalize()`` mutate the receiver.

    Do not instantiate ``Vector`` directly; use ``vector_type()`` or one of
    the predefined aliases.
    """

    __slots__ = ('_data',)

    dimension: int = 0
    dtype = np.float64
    # Make numpy scalars defer to __rmul__ instead of broadcasting over us
    __array_ufunc__ = None

    def __init__(self, *components: Scalar):
        n = self.dimension
        assert n > 0, "use vector_type() to get a concrete vector class"
        assert len(components) <= n, f"expected at most {n} components, got {len(components)}"

        self._data = np.zeros(n, dtype=self.dtype)
        if components:
            self._data[:len(components)] = components
            # Missing trailing components repeat the last given value
            self._data[len(components):] = components[-1]

    @classmethod
    def from_array(cls, arr) -> Vector:
        """Create a vector from a numpy array (or any sequence) of length N."""
        data = np.asarray(arr, dtype=cls.dtype)
        assert data.shape == (cls.dimension,), f"expected shape ({cls.dimension},), got {data.shape}"
        v = cls.__new__(cls)
        v._data = data
        return v

    def _wrap(self, arr: np.ndarray) -> Vector:
        v = type(self).__new__(type(self))
        v._data = arr
        return v

    def _check_compatible(self, other: Vector) -> None:
        assert other.dimension == self.dimension, (
            f"dimension mismatch: {self.dimension} vs {other.dimension}"
        )

    # Component access

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __setitem__(self, index: int, value: Scalar):
        self._data[index] = value

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __repr__(self) -> str:
        inner = ", ".join(f"{c:.4f}" for c in self._data)
        return f"{type(self).__name__}({inner})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector) or other.dimension != self.dimension:
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    # Mutable, and equality is approximate
    __hash__ = None

    def copy(self) -> Vector:
        return self._wrap(self._data.copy())

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    # Arithmetic

    def __neg__(self) -> Vector:
        return self._wrap(-self._data)

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return self._wrap(self._data + other._data)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return self._wrap(self._data - other._data)

    def __mul__(self, other: Union[Vector, Scalar]):
        # vector * vector is the dot product
        if isinstance(other, Vector):
            return self.dot(other)
        if isinstance(other, (int, float, np.number)):
            return self._wrap(self._data * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Vector:
        if isinstance(other, (int, float, np.number)):
            return self._wrap(other * self._data)
        return NotImplemented

    def __truediv__(self, other: Scalar) -> Vector:
        if isinstance(other, (int, float, np.number)):
            return self._wrap(self._data / other)
        return NotImplemented

    def __iadd__(self, other: Union[Vector, Scalar]) -> Vector:
        if isinstance(other, Vector):
            self._check_compatible(other)
            self._data += other._data
        else:
            self._data += other
        return self

    def __isub__(self, other: Union[Vector, Scalar]) -> Vector:
        if isinstance(other, Vector):
            self._check_compatible(other)
            self._data -= other._data
        else:
            self._data -= other
        return self

    def __imul__(self, other: Union[Vector, Scalar]) -> Vector:
        # Component-wise for a vector operand
        if isinstance(other, Vector):
            self._check_compatible(other)
            self._data *= other._data
        else:
            self._data *= other
        return self

    def __itruediv__(self, other: Union[Vector, Scalar]) -> Vector:
        if isinstance(other, Vector):
            self._check_compatible(other)
            self._data /= other._data
        else:
            self._data /= other
        return self

    # Vector operations

    def dot(self, other: Vector) -> float:
        """Compute dot product with another vector."""
        self._check_compatible(other)
        return float(np.dot(self._data, other._data))

    def cross_product(self, other: Vector) -> Vector:
        """Compute the cross product using the first three components.

        Only defined for vectors with at least three dimensions.
        """
        assert self.dimension >= 3, "cross product needs at least 3 dimensions"
        self._check_compatible(other)
        result = np.zeros(self.dimension, dtype=self.dtype)
        result[:3] = np.cross(self._data[:3], other._data[:3])
        return self._wrap(result)

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(self.square_of_length())

    def square_of_length(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vector:
        """Scale this vector to unit length in place and return it.

        A zero-length vector is not special-cased; its components become
        non-finite.
        """
        length = self.length()
        with np.errstate(divide='ignore', invalid='ignore'):
            self._data /= length
        return self

    def normalized(self) -> Vector:
        """Return a unit vector in the same direction."""
        return self.copy().normalize()

    def get_reflective(self, normal: Vector) -> Vector:
        """Reflect this vector around the given unit normal."""
        assert abs(normal.length() - 1.0) <= 1e-5, "reflection normal must be unit length"
        return self - 2.0 * self.dot(normal) * normal

    def angle(self, axis_1: int, axis_2: int) -> float:
        """Angle of the normalized vector within the plane of two axes."""
        unit = self.normalized()
        return math.atan2(unit[axis_2], unit[axis_1])


_VECTOR_TYPES: Dict[Tuple[int, str], type] = {}


def vector_type(dimension: int, dtype=np.float64) -> type:
    """Return the vector class for the given dimension and scalar type.

    Classes are cached so that repeated calls return the same type.
    """
    assert dimension > 0, "dimension must be positive"
    key = (dimension, np.dtype(dtype).name)
    cls = _VECTOR_TYPES.get(key)
    if cls is None:
        cls = type(f"Vec{dimension}", (Vector,), {
            '__slots__': (),
            'dimension': dimension,
            'dtype': np.dtype(dtype).type,
        })
        _VECTOR_TYPES[key] = cls
    return cls


class Vec2(Vector):
    """Two-dimensional vector."""

    __slots__ = ()
    dimension = 2

    @classmethod
    def from_angle(cls, theta: float) -> Vec2:
        """Unit vector (cos θ, sin θ)."""
        return cls(math.cos(theta), math.sin(theta))


class Vec3(Vector):
    """Three-dimensional vector."""

    __slots__ = ()
    dimension = 3


_VECTOR_TYPES[(2, 'float64')] = Vec2
_VECTOR_TYPES[(3, 'float64')] = Vec3

# Convenience type aliases
Point3 = Vec3
Color = Vec3
