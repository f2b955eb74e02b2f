"""Compute backends for FFTs and element-wise field arithmetic."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

_AXES = (0, 1, 2)


def _check_3d(data: np.ndarray) -> np.ndarray:
    array = np.asarray(data, dtype=np.complex128)
    if array.ndim != 3:
        raise ValueError(f"expected a 3-dimensional array, got {array.ndim} dimensions")
    return array


def _check_same_shape(*arrays: np.ndarray) -> None:
    first = arrays[0].shape
    for other in arrays[1:]:
        if other.shape != first:
            raise ValueError(f"shape mismatch: {first} vs {other.shape}")


class ComputeBackend(ABC):
    """Interface for the numerical kernels a simulation relies on."""

    @abstractmethod
    def fft_3d(self, data: np.ndarray) -> np.ndarray:
        """Forward 3-D FFT, unnormalised."""

    @abstractmethod
    def ifft_3d(self, data: np.ndarray) -> np.ndarray:
        """Inverse 3-D FFT, normalised by the number of elements."""

    @abstractmethod
    def scale(self, factor: complex, data: np.ndarray, offset: complex | None = None) -> np.ndarray:
        """Return ``factor * data + offset``."""

    @abstractmethod
    def mix(self, alpha: complex, a: np.ndarray, beta: complex, b: np.ndarray) -> np.ndarray:
        """Return ``alpha * a + beta * b``."""

    @abstractmethod
    def lerp(self, a: np.ndarray, b: np.ndarray, weight: np.ndarray) -> np.ndarray:
        """Return ``a + weight * (b - a)``."""

    @abstractmethod
    def name(self) -> str:
        """Short identifier of the backend."""


class NumpyFFTBackend(ComputeBackend):
    """Portable backend built on numpy."""

    def fft_3d(self, data: np.ndarray) -> np.ndarray:
        return np.fft.fftn(_check_3d(data), axes=_AXES)

    def ifft_3d(self, data: np.ndarray) -> np.ndarray:
        return np.fft.ifftn(_check_3d(data), axes=_AXES)

    def scale(self, factor: complex, data: np.ndarray, offset: complex | None = None) -> np.ndarray:
        array = np.asarray(data, dtype=np.complex128)
        result = factor * array
        if offset is not None:
            result = result + offset
        return result

    def mix(self, alpha: complex, a: np.ndarray, beta: complex, b: np.ndarray) -> np.ndarray:
        a = np.asarray(a, dtype=np.complex128)
        b = np.asarray(b, dtype=np.complex128)
        _check_same_shape(a, b)
        return alpha * a + beta * b

    def lerp(self, a: np.ndarray, b: np.ndarray, weight: np.ndarray) -> np.ndarray:
        a = np.asarray(a, dtype=np.complex128)
        b = np.asarray(b, dtype=np.complex128)
        weight = np.asarray(weight, dtype=np.complex128)
        _check_same_shape(a, b, weight)
        return a + weight * (b - a)

    def name(self) -> str:
        return "numpy"


_BACKENDS = {"numpy": NumpyFFTBackend}


def default_backend() -> ComputeBackend:
    """The backend used when none is chosen explicitly."""
    return NumpyFFTBackend()


def create_backend(name: str) -> ComputeBackend:
    """Create a backend by name; raises ValueError for unknown names."""
    try:
        return _BACKENDS[name]()
    except KeyError:
        known = ", ".join(sorted(_BACKENDS))
        raise ValueError(f"unknown backend {name!r}; available: {known}") from None