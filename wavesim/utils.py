"""Helpers for building media, sources and finite-difference kernels."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from wavesim.array import WaveArray, _as_shape


def _add_absorption_ramp(
    array: np.ndarray, dim: int, start: int, width: int, strength: float, reverse: bool
) -> None:
    offsets = np.arange(width, dtype=np.float64)
    if reverse:
        profile = (offsets + 0.79) / (width + 0.66)
    else:
        profile = (width - offsets - 0.21) / (width + 0.66)
    absorption = 1j * strength * profile

    view_shape = [1, 1, 1]
    view_shape[dim] = width
    index = [slice(None)] * 3
    index[dim] = slice(start, start + width)
    array[tuple(index)] += absorption.reshape(view_shape)


def add_absorbing_boundaries(
    permittivity: WaveArray,
    boundary_widths: Sequence[Sequence[int]],
    strength: float,
    periodic: Sequence[bool] = (False, False, False),
) -> tuple[WaveArray, tuple[tuple[int, int], tuple[int, int], tuple[int, int]]]:
    """Pad ``permittivity`` and add a linear absorbing ramp in the padding.

    Returns the padded array and, per dimension, the ``(start, stop)`` range
    holding the original data. Periodic dimensions are padded but get no ramp.
    """
    if len(boundary_widths) != 3 or len(periodic) != 3:
        raise ValueError("boundary_widths and periodic must each have 3 entries")
    widths = [(int(left), int(right)) for left, right in boundary_widths]
    if any(left < 0 or right < 0 for left, right in widths):
        raise ValueError(f"boundary widths must be non-negative, got {boundary_widths!r}")

    shape = permittivity.shape
    new_shape = tuple(n + left + right for n, (left, right) in zip(shape, widths))
    padded = np.zeros(new_shape, dtype=np.complex128)
    interior = tuple(slice(left, left + n) for n, (left, _) in zip(shape, widths))
    padded[interior] = permittivity.data

    for dim, ((left, right), is_periodic) in enumerate(zip(widths, periodic)):
        if is_periodic:
            continue
        if left > 0:
            _add_absorption_ramp(padded, dim, 0, left, strength, reverse=False)
        if right > 0:
            _add_absorption_ramp(
                padded, dim, new_shape[dim] - right, right, strength, reverse=True
            )

    roi = tuple((left, left + n) for n, (left, _) in zip(shape, widths))
    return WaveArray(padded), roi  # type: ignore[return-value]


def create_source(
    position: Sequence[int], pixel_size: float, wavelength: float, amplitude: complex
) -> tuple[WaveArray, tuple[int, int, int]]:
    """A single-pixel point source of ``amplitude`` placed at ``position``."""
    source = WaveArray.zeros((1, 1, 1))
    source.data[0, 0, 0] = amplitude
    return source, _as_shape(position)


def create_gaussian_source(
    position: Sequence[int],
    width: Sequence[float],
    pixel_size: float,
    wavelength: float,
    amplitude: complex,
) -> tuple[WaveArray, tuple[int, int, int]]:
    """A Gaussian blob of 1/e half-widths ``width`` centred on ``position``.

    The patch spans about four widths per axis, always an odd number of
    pixels; the returned position is its corner, clamped at zero.
    """
    if len(width) != 3:
        raise ValueError("width must have 3 entries")
    if pixel_size <= 0:
        raise ValueError(f"pixel_size must be positive, got {pixel_size}")
    size = tuple(max(0, math.ceil(4.0 * w / pixel_size)) | 1 for w in width)
    centers = [n // 2 for n in size]

    coords = np.indices(size, dtype=np.float64)
    r2 = sum(
        ((axis_coords - center) * pixel_size / w) ** 2
        for axis_coords, center, w in zip(coords, centers, width)
    )
    source = WaveArray(amplitude * np.exp(-r2))

    adjusted = tuple(max(0, p - c) for p, c in zip(_as_shape(position), centers))
    return source, adjusted  # type: ignore[return-value]


def laplace_kernel_1d(pixel_size: float, length: int) -> np.ndarray:
    """Periodic 1-D Laplace kernel of ``length`` samples with zero sum."""
    if length < 1:
        raise ValueError(f"kernel length must be at least 1, got {length}")
    if length == 1:
        return np.zeros(1, dtype=np.complex128)

    indices = np.arange(length)
    x = np.where(indices <= length // 2, indices, indices - length) * math.pi

    kernel = np.empty(length, dtype=np.complex128)
    kernel[0] = math.pi**2 / (3.0 * pixel_size**2)
    xi = x[1:]
    kernel[1:] = -(math.pi**2) / pixel_size**2 * 2.0 * np.cos(xi) / xi**2

    total = kernel.sum()
    middle = length // 2
    if length % 2 == 0:
        kernel[middle] -= total
    else:
        kernel[middle] -= total / 2.0
        kernel[middle + 1] -= total / 2.0
    return kernel


def normalize(
    data,
    min_val: float | None = None,
    max_val: float | None = None,
    a: float = 0.0,
    b: float = 1.0,
) -> np.ndarray:
    """Map ``data`` linearly so that ``min_val``..``max_val`` becomes ``a``..``b``.

    Missing bounds are taken from the data; a (near-)zero range maps
    everything to ``a``.
    """
    values = np.asarray(data, dtype=np.float64)
    if values.size == 0:
        return values.copy()
    low = float(np.min(values)) if min_val is None else min_val
    high = float(np.max(values)) if max_val is None else max_val
    span = high - low
    if abs(span) < 1e-10:
        return np.full(values.shape, a, dtype=np.float64)
    return (values - low) / span * (b - a) + a