"""Three-dimensional complex field container used throughout the simulator."""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Number

import numpy as np

Shape3 = tuple[int, int, int]


def _as_shape(shape: Sequence[int]) -> Shape3:
    dims = tuple(int(d) for d in shape)
    if len(dims) != 3:
        raise ValueError(f"expected a 3-dimensional shape, got {shape!r}")
    if any(d < 0 for d in dims):
        raise ValueError(f"shape dimensions must be non-negative, got {shape!r}")
    return dims  # type: ignore[return-value]


class WaveArray:
    """A 3-D array of complex128 values with field-oriented helpers."""

    __slots__ = ("data",)

    def __init__(self, data) -> None:
        array = np.array(data, dtype=np.complex128)
        if array.ndim != 3:
            raise ValueError(f"WaveArray needs 3-dimensional data, got {array.ndim} dimensions")
        self.data = array

    @classmethod
    def zeros(cls, shape: Sequence[int]) -> WaveArray:
        """Array of the given shape filled with zeros."""
        return cls(np.zeros(_as_shape(shape), dtype=np.complex128))

    @classmethod
    def from_scalar(cls, shape: Sequence[int], value: complex) -> WaveArray:
        """Array of the given shape filled with ``value``."""
        return cls(np.full(_as_shape(shape), value, dtype=np.complex128))

    @classmethod
    def from_real(cls, real_data) -> WaveArray:
        """Complex array whose real parts are ``real_data`` and imaginary parts zero."""
        real = np.asarray(real_data, dtype=np.float64)
        return cls(real.astype(np.complex128))

    @property
    def shape(self) -> Shape3:
        return tuple(self.data.shape)  # type: ignore[return-value]

    @property
    def ndim(self) -> int:
        return self.data.ndim

    @property
    def is_empty(self) -> bool:
        return self.data.size == 0

    def __len__(self) -> int:
        return int(self.data.size)

    def __repr__(self) -> str:
        return f"WaveArray(shape={self.shape})"

    def copy(self) -> WaveArray:
        """Independent copy of this array."""
        return WaveArray(self.data.copy())

    def fill(self, value: complex) -> None:
        """Set every element to ``value``."""
        self.data.fill(value)

    def norm_squared(self) -> float:
        """Sum of squared magnitudes of all elements."""
        return float(np.sum(self.data.real**2 + self.data.imag**2))

    def inner_product(self, other: WaveArray) -> complex:
        """Sum of ``conj(self) * other`` over all elements."""
        if self.shape != other.shape:
            raise ValueError(f"shape mismatch: {self.shape} vs {other.shape}")
        return complex(np.vdot(self.data, other.data))

    def slice(self, start: Sequence[int], stop: Sequence[int]) -> WaveArray:
        """Copy of the box ``start[d]:stop[d]`` in every dimension."""
        s0, s1, s2 = _as_shape(start)
        e0, e1, e2 = _as_shape(stop)
        return WaveArray(self.data[s0:e0, s1:e1, s2:e2].copy())

    def edges(self, widths: Sequence[Sequence[int]]) -> list[WaveArray]:
        """Edge slabs of the given (left, right) widths, dimension by dimension."""
        if len(widths) != 3:
            raise ValueError("widths must give a (left, right) pair for each of 3 dimensions")
        shape = self.shape
        result = []
        for dim, (left, right) in enumerate(widths):
            if left > 0:
                stop = list(shape)
                stop[dim] = left
                result.append(self.slice((0, 0, 0), stop))
            if right > 0:
                start = [0, 0, 0]
                start[dim] = shape[dim] - right
                result.append(self.slice(start, shape))
        return result

    def __add__(self, other: WaveArray) -> WaveArray:
        if not isinstance(other, WaveArray):
            return NotImplemented
        return WaveArray(self.data + other.data)

    def __sub__(self, other: WaveArray) -> WaveArray:
        if not isinstance(other, WaveArray):
            return NotImplemented
        return WaveArray(self.data - other.data)

    def __mul__(self, scalar: complex) -> WaveArray:
        if not isinstance(scalar, Number):
            return NotImplemented
        return WaveArray(self.data * scalar)

    __rmul__ = __mul__

    def __iadd__(self, other: WaveArray) -> WaveArray:
        if not isinstance(other, WaveArray):
            return NotImplemented
        self.data += other.data
        return self

    def __isub__(self, other: WaveArray) -> WaveArray:
        if not isinstance(other, WaveArray):
            return NotImplemented
        self.data -= other.data
        return self

    def __imul__(self, scalar: complex) -> WaveArray:
        if not isinstance(scalar, Number):
            return NotImplemented
        self.data *= scalar
        return self