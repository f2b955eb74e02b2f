"""Builders for common excitation patterns: plane waves, beams and dipoles."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

import numpy as np

from wavesim.array import WaveArray, _as_shape

Position = tuple[int, int, int]

_DIPOLE_EXTENT = 3


class SourcePlane(Enum):
    """Plane in which a planar source is laid out."""

    XY = "xy"
    XZ = "xz"
    YZ = "yz"

    @property
    def normal_axis(self) -> int:
        """Index of the axis perpendicular to the plane."""
        return {SourcePlane.XY: 2, SourcePlane.XZ: 1, SourcePlane.YZ: 0}[self]


class DipoleOrientation(Enum):
    """Axis along which a dipole is aligned; the value is the axis index."""

    X = 0
    Y = 1
    Z = 2


def _grid(shape: Sequence[int], spacing: float) -> list[np.ndarray]:
    return np.meshgrid(
        *(np.arange(n, dtype=np.float64) * spacing for n in shape), indexing="ij"
    )


class SourceBuilder:
    """Creates source patches for a simulation grid of ``shape``.

    Every builder returns the patch together with the grid position of its
    first element.
    """

    def __init__(self, shape: Sequence[int], pixel_size: float, wavelength: float) -> None:
        if wavelength == 0:
            raise ValueError("wavelength must be non-zero")
        self.shape = _as_shape(shape)
        self.pixel_size = float(pixel_size)
        self.wavelength = float(wavelength)

    def __repr__(self) -> str:
        return (
            f"SourceBuilder(shape={self.shape}, pixel_size={self.pixel_size}, "
            f"wavelength={self.wavelength})"
        )

    @property
    def _wavenumber(self) -> float:
        return 2.0 * math.pi / self.wavelength

    def _plane_layout(
        self, source_plane: SourcePlane, position: Sequence[int] | None
    ) -> tuple[Position, Position]:
        axis = source_plane.normal_axis
        shape = list(self.shape)
        shape[axis] = 1
        if position is None:
            default = [0, 0, 0]
            default[axis] = self.shape[axis] // 2
            pos = tuple(default)
        else:
            pos = _as_shape(position)
        return tuple(shape), pos  # type: ignore[return-value]

    def _wave_vector(self, theta: float, phi: float) -> tuple[float, float, float]:
        k = self._wavenumber
        return (
            k * math.sin(theta) * math.cos(phi),
            k * math.sin(theta) * math.sin(phi),
            k * math.cos(theta),
        )

    def point_source(
        self, position: Sequence[int], amplitude: complex
    ) -> tuple[WaveArray, Position]:
        """A single pixel of ``amplitude`` at ``position``."""
        source = WaveArray.zeros((1, 1, 1))
        source.data[0, 0, 0] = amplitude
        return source, _as_shape(position)

    def plane_wave(
        self,
        source_plane: SourcePlane,
        theta: float,
        phi: float,
        amplitude: complex,
        position: Sequence[int] | None = None,
    ) -> tuple[WaveArray, Position]:
        """Plane wave with polar angle ``theta`` and azimuth ``phi`` (radians).

        Without a position the plane sits in the middle of the normal axis.
        """
        shape, pos = self._plane_layout(source_plane, position)
        kx, ky, kz = self._wave_vector(theta, phi)
        x, y, z = _grid(shape, self.pixel_size)
        phase = kx * x + ky * y + kz * z
        return WaveArray(amplitude * np.exp(1j * phase)), pos

    def gaussian_beam(
        self,
        source_plane: SourcePlane,
        beam_waist: float,
        theta: float,
        phi: float,
        amplitude: complex,
        position: Sequence[int] | None = None,
    ) -> tuple[WaveArray, Position]:
        """Plane wave under a Gaussian envelope of radius ``beam_waist``.

        The envelope is centred in the first two axes of the patch.
        """
        shape, pos = self._plane_layout(source_plane, position)
        kx, ky, kz = self._wave_vector(theta, phi)
        x, y, z = _grid(shape, self.pixel_size)
        cx = shape[0] * self.pixel_size / 2.0
        cy = shape[1] * self.pixel_size / 2.0
        r2 = ((x - cx) / beam_waist) ** 2 + ((y - cy) / beam_waist) ** 2
        phase = kx * x + ky * y + kz * z
        return WaveArray(amplitude * np.exp(-r2) * np.exp(1j * phase)), pos

    def dipole_source(
        self,
        position: Sequence[int],
        orientation: DipoleOrientation,
        amplitude: complex,
    ) -> tuple[WaveArray, Position]:
        """A 7x7x7 dipole pattern centred on ``position``.

        The returned position is the patch corner, clamped at zero.
        """
        size = 2 * _DIPOLE_EXTENT + 1
        offsets = np.indices((size, size, size), dtype=np.float64) - _DIPOLE_EXTENT
        r = np.sqrt(np.sum(offsets**2, axis=0))
        centre = r < 1e-10
        safe_r = np.where(centre, 1.0, r)
        pattern = np.abs(offsets[orientation.value]) / safe_r
        values = amplitude * pattern * np.exp(-(r**2) / 4.0)
        values = np.where(centre, amplitude, values)
        adjusted = tuple(max(0, p - _DIPOLE_EXTENT) for p in _as_shape(position))
        return WaveArray(values), adjusted  # type: ignore[return-value]

    def focused_beam(
        self,
        focal_point: Sequence[float],
        numerical_aperture: float,
        amplitude: complex,
        source_plane: SourcePlane = SourcePlane.XY,
    ) -> tuple[WaveArray, Position]:
        """Spherical wave converging on ``focal_point`` within the aperture cone.

        Points outside the cone, and every point when the aperture exceeds 1,
        are left at zero. The patch is placed at the grid origin.
        """
        if len(focal_point) != 3:
            raise ValueError("focal_point must have 3 entries")
        shape, _ = self._plane_layout(source_plane, (0, 0, 0))
        x, y, z = _grid(shape, self.pixel_size)
        dx, dy, dz = x - focal_point[0], y - focal_point[1], z - focal_point[2]
        lateral = np.hypot(dx, dy)
        r = np.sqrt(lateral**2 + dz**2)
        with np.errstate(divide="ignore", invalid="ignore"):
            max_angle = np.arcsin(numerical_aperture)
            angle = np.arctan(lateral / np.abs(dz))
            inside = (r > 1e-10) & (angle <= max_angle)
            values = amplitude / np.sqrt(r) * np.exp(-1j * self._wavenumber * r)
        return WaveArray(np.where(inside, values, 0.0)), (0, 0, 0)

    def vortex_beam(
        self,
        source_plane: SourcePlane,
        topological_charge: int,
        beam_waist: float,
        amplitude: complex,
        position: Sequence[int] | None = None,
    ) -> tuple[WaveArray, Position]:
        """Gaussian beam carrying an azimuthal phase ``charge * angle``."""
        shape, pos = self._plane_layout(source_plane, position)
        x, y, _ = _grid(shape, self.pixel_size)
        x = x - shape[0] * self.pixel_size / 2.0
        y = y - shape[1] * self.pixel_size / 2.0
        r = np.hypot(x, y)
        angle = np.arctan2(y, x)
        gaussian = np.exp(-((r / beam_waist) ** 2))
        values = amplitude * gaussian * np.exp(1j * topological_charge * angle)
        return WaveArray(values), pos


class MultiSource:
    """A set of source patches that are summed into one field."""

    def __init__(self) -> None:
        self.sources: list[tuple[WaveArray, Position]] = []

    def __len__(self) -> int:
        return len(self.sources)

    def add_source(self, source: WaveArray, position: Sequence[int]) -> None:
        """Add a patch whose first element lies at ``position``."""
        self.sources.append((source, _as_shape(position)))

    def combine(self, shape: Sequence[int]) -> WaveArray:
        """Sum all patches into a field of ``shape``, clipping at its far edges."""
        dims = _as_shape(shape)
        combined = WaveArray.zeros(dims)
        for source, position in self.sources:
            if any(p > n for p, n in zip(position, dims)):
                raise ValueError(f"source position {position} lies outside shape {dims}")
            extent = [min(s, n - p) for s, p, n in zip(source.shape, position, dims)]
            target = tuple(slice(p, p + e) for p, e in zip(position, extent))
            patch = tuple(slice(0, e) for e in extent)
            combined.data[target] += source.data[patch]
        return combined