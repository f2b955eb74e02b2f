"""Field-level array operations dispatched to the active compute backend."""

from __future__ import annotations

import numpy as np

from wavesim.array import WaveArray
from wavesim.backend import ComputeBackend, default_backend

_BACKEND: ComputeBackend = default_backend()

_MATMUL_SUBSCRIPTS = {
    0: "ab,bjk->ajk",
    1: "ab,ibk->iak",
    2: "ab,ijb->ija",
}


def _check_same_shape(a: WaveArray, b: WaveArray) -> None:
    if a.shape != b.shape:
        raise ValueError(f"shape mismatch: {a.shape} vs {b.shape}")


def multiply(a: WaveArray, b: WaveArray) -> WaveArray:
    """Element-wise product of two arrays."""
    _check_same_shape(a, b)
    return WaveArray(a.data * b.data)


def divide(a: WaveArray, b: WaveArray) -> WaveArray:
    """Element-wise quotient of two arrays."""
    _check_same_shape(a, b)
    with np.errstate(divide="ignore", invalid="ignore"):
        return WaveArray(a.data / b.data)


def scale(factor: complex, array: WaveArray, offset: complex | None = None) -> WaveArray:
    """Return ``factor * array + offset``."""
    return WaveArray(_BACKEND.scale(factor, array.data, offset))


def mix(alpha: complex, a: WaveArray, beta: complex, b: WaveArray) -> WaveArray:
    """Return ``alpha * a + beta * b``."""
    return WaveArray(_BACKEND.mix(alpha, a.data, beta, b.data))


def lerp(a: WaveArray, b: WaveArray, weight: WaveArray) -> WaveArray:
    """Return ``a + weight * (b - a)``."""
    return WaveArray(_BACKEND.lerp(a.data, b.data, weight.data))


def copy(source: WaveArray) -> WaveArray:
    """Independent copy of ``source``."""
    return source.copy()


def fft_3d(array: WaveArray) -> WaveArray:
    """Forward 3-D FFT of a field."""
    return WaveArray(_BACKEND.fft_3d(array.data))


def ifft_3d(array: WaveArray) -> WaveArray:
    """Inverse 3-D FFT of a field, normalised by the number of elements."""
    return WaveArray(_BACKEND.ifft_3d(array.data))


def matmul(matrix, x: WaveArray, axis: int) -> WaveArray:
    """Apply ``matrix`` to every line of ``x`` along ``axis``.

    ``matrix`` is either a 2-D array or a 3-D array whose first slice along
    the last axis holds the matrix.
    """
    if axis not in _MATMUL_SUBSCRIPTS:
        raise ValueError(f"invalid axis {axis!r}; expected 0, 1 or 2")
    m = np.asarray(matrix, dtype=np.complex128)
    if m.ndim == 3:
        m = m[:, :, 0]
    if m.ndim != 2:
        raise ValueError(f"matrix must be 2- or 3-dimensional, got {m.ndim} dimensions")
    if m.shape[1] != x.shape[axis]:
        raise ValueError(
            f"matrix has {m.shape[1]} columns but axis {axis} has length {x.shape[axis]}"
        )
    return WaveArray(np.einsum(_MATMUL_SUBSCRIPTS[axis], m, x.data))