"""Separable analytical solutions of the Helmholtz equation on simple shapes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from wavesim.array import WaveArray, _as_shape


class BoundaryCondition(Enum):
    """Condition imposed on the boundary of a domain."""

    DIRICHLET = "dirichlet"
    """The field vanishes on the boundary."""
    NEUMANN = "neumann"
    """The normal derivative vanishes on the boundary."""


def _check_modes(max_modes: Sequence[int], count: int) -> tuple[int, ...]:
    modes = tuple(int(m) for m in max_modes)
    if len(modes) != count:
        raise ValueError(f"max_modes must have {count} entries, got {len(modes)}")
    if any(m < 0 for m in modes):
        raise ValueError(f"mode numbers must be non-negative, got {modes!r}")
    return modes


@dataclass(frozen=True)
class RectangleParams:
    """Box of size ``dimensions`` with per-face boundary conditions.

    Faces are ordered x_min, x_max, y_min, y_max, z_min, z_max.
    """

    dimensions: tuple[float, float, float]
    boundary_conditions: tuple[BoundaryCondition, ...]
    max_modes: tuple[int, int, int]

    def __post_init__(self) -> None:
        dims = tuple(float(d) for d in self.dimensions)
        if len(dims) != 3:
            raise ValueError("dimensions must have 3 entries")
        conditions = tuple(self.boundary_conditions)
        if len(conditions) != 6:
            raise ValueError("boundary_conditions must have 6 entries")
        object.__setattr__(self, "dimensions", dims)
        object.__setattr__(self, "boundary_conditions", conditions)
        object.__setattr__(self, "max_modes", _check_modes(self.max_modes, 3))


@dataclass(frozen=True)
class CircleParams:
    """Disc of ``radius`` with angular and radial mode limits."""

    radius: float
    boundary_condition: BoundaryCondition
    max_modes: tuple[int, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_modes", _check_modes(self.max_modes, 2))


@dataclass(frozen=True)
class SphereParams:
    """Ball of ``radius`` with harmonic and radial mode limits."""

    radius: float
    boundary_condition: BoundaryCondition
    max_modes: tuple[int, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_modes", _check_modes(self.max_modes, 2))


class RectangularSolution:
    """Sum of sine modes ``sin(kx x) sin(ky y) sin(kz z)`` in a box."""

    def __init__(self, params: RectangleParams) -> None:
        self.params = params
        self._k = [
            np.arange(1, n + 1, dtype=np.float64) * math.pi / length
            for n, length in zip(params.max_modes, params.dimensions)
        ]
        kx, ky, kz = self._k
        k_squared = (
            kx[:, None, None] ** 2 + ky[None, :, None] ** 2 + kz[None, None, :] ** 2
        )
        self._eigenvalues = k_squared.ravel()
        self._coefficients = np.ones(self._eigenvalues.size, dtype=np.complex128)

    @property
    def eigenvalues(self) -> tuple[float, ...]:
        """Squared wavenumbers of all modes, ordered by (nx, ny, nz)."""
        return tuple(float(v) for v in self._eigenvalues)

    @property
    def coefficients(self) -> tuple[complex, ...]:
        """Mode weights, in the same order as the eigenvalues."""
        return tuple(complex(c) for c in self._coefficients)

    def set_coefficients(self, coefficients: Sequence[complex]) -> None:
        """Replace the mode weights; the count must match the number of modes."""
        values = np.asarray(coefficients, dtype=np.complex128).ravel()
        if values.size != self._coefficients.size:
            raise ValueError(
                f"expected {self._coefficients.size} coefficients, got {values.size}"
            )
        self._coefficients = values.copy()

    def _coefficient_cube(self) -> np.ndarray:
        return self._coefficients.reshape(self.params.max_modes)

    def evaluate_at(self, x: float, y: float, z: float) -> complex:
        """Value of the solution at a point."""
        kx, ky, kz = self._k
        sx, sy, sz = np.sin(kx * x), np.sin(ky * y), np.sin(kz * z)
        return complex(np.einsum("abc,a,b,c->", self._coefficient_cube(), sx, sy, sz))

    def evaluate_on_grid(
        self,
        shape: Sequence[int],
        grid_spacing: Sequence[float],
        offset: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> WaveArray:
        """Values at ``offset + index * grid_spacing`` for every grid index."""
        dims = _as_shape(shape)
        sines = [
            np.sin(k[:, None] * (o + np.arange(n, dtype=np.float64) * h)[None, :])
            for k, n, h, o in zip(self._k, dims, grid_spacing, offset)
        ]
        field = np.einsum("abc,ai,bj,ck->ijk", self._coefficient_cube(), *sines)
        return WaveArray(field.reshape(dims))


def _centred_axis(n: int, spacing: float, centre: float) -> np.ndarray:
    return centre + (np.arange(n, dtype=np.float64) - n / 2.0) * spacing


class CircularSolution:
    """Lowest-order radial profile inside a disc."""

    def __init__(self, params: CircleParams) -> None:
        self.params = params
        self._eigenvalues = [1.0]
        self._coefficients = [complex(1.0, 0.0)]

    @property
    def _k(self) -> float:
        return math.sqrt(self._eigenvalues[0])

    def evaluate_at_polar(self, r: float, theta: float) -> complex:
        """Value at polar coordinates; zero outside the disc."""
        if r <= self.params.radius:
            return complex(math.sin(self._k * r) * math.cos(theta), 0.0)
        return complex(0.0, 0.0)

    def evaluate_at(self, x: float, y: float) -> complex:
        """Value at Cartesian coordinates."""
        return self.evaluate_at_polar(math.hypot(x, y), math.atan2(y, x))

    def evaluate_on_grid_2d(
        self,
        shape: Sequence[int],
        grid_spacing: Sequence[float],
        center: Sequence[float] = (0.0, 0.0),
    ) -> np.ndarray:
        """Values on a 2-D grid whose middle index lies at ``center``."""
        n0, n1 = (int(n) for n in shape)
        x = _centred_axis(n0, grid_spacing[0], center[0])
        y = _centred_axis(n1, grid_spacing[1], center[1])
        xx, yy = np.meshgrid(x, y, indexing="ij")
        r = np.hypot(xx, yy)
        theta = np.arctan2(yy, xx)
        values = np.where(r <= self.params.radius, np.sin(self._k * r) * np.cos(theta), 0.0)
        return values.astype(np.complex128)


class SphericalSolution:
    """Lowest-order radial profile inside a ball."""

    def __init__(self, params: SphereParams) -> None:
        self.params = params
        self._eigenvalues = [1.0]
        self._coefficients = [complex(1.0, 0.0)]

    @property
    def _k(self) -> float:
        return math.sqrt(self._eigenvalues[0])

    def evaluate_at_spherical(self, r: float, theta: float, phi: float) -> complex:
        """Value at spherical coordinates; zero outside the ball."""
        if r <= self.params.radius:
            return complex(math.sin(self._k * r) * math.sin(theta) * math.cos(phi), 0.0)
        return complex(0.0, 0.0)

    def evaluate_at(self, x: float, y: float, z: float) -> complex:
        """Value at Cartesian coordinates; undefined (NaN) at the origin."""
        r = math.sqrt(x * x + y * y + z * z)
        theta = math.acos(z / r) if r > 0 else math.nan
        return self.evaluate_at_spherical(r, theta, math.atan2(y, x))

    def evaluate_on_grid(
        self,
        shape: Sequence[int],
        grid_spacing: Sequence[float],
        center: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> WaveArray:
        """Values on a 3-D grid whose middle index lies at ``center``."""
        dims = _as_shape(shape)
        axes = [_centred_axis(n, h, c) for n, h, c in zip(dims, grid_spacing, center)]
        xx, yy, zz = np.meshgrid(*axes, indexing="ij")
        r = np.sqrt(xx**2 + yy**2 + zz**2)
        with np.errstate(divide="ignore", invalid="ignore"):
            theta = np.arccos(zz / r)
        phi = np.arctan2(yy, xx)
        values = np.where(
            r <= self.params.radius, np.sin(self._k * r) * np.sin(theta) * np.cos(phi), 0.0
        )
        return WaveArray(values)


def factorial(n: int) -> float:
    """``n!`` as a float."""
    if n < 0:
        raise ValueError(f"factorial of a negative number: {n}")
    return float(math.factorial(n))


def bessel_j(n: int, x: float) -> float:
    """Bessel function of the first kind ``J_n(x)`` by power series."""
    if n < 0:
        raise ValueError(f"order must be non-negative, got {n}")
    if abs(x) < 1e-10:
        return 1.0 if n == 0 else 0.0
    term = 1.0 if n == 0 else (x / 2.0) ** n / factorial(n)
    result = 0.0
    for k in range(50):
        result += term
        term *= -(x * x / 4.0) / ((k + 1) * (k + n + 1))
        if abs(term) < 1e-15:
            break
    return result


def spherical_bessel_j(n: int, x: float) -> float:
    """Spherical Bessel function of the first kind ``j_n(x)``."""
    if n < 0:
        raise ValueError(f"order must be non-negative, got {n}")
    if abs(x) < 1e-10:
        return 1.0 if n == 0 else 0.0
    sin_x, cos_x = math.sin(x), math.cos(x)
    if n == 0:
        return sin_x / x
    if n == 1:
        return sin_x / (x * x) - cos_x / x
    if n == 2:
        return (3.0 / (x * x) - 1.0) * sin_x / x - 3.0 * cos_x / (x * x)
    previous, current = sin_x / x, sin_x / (x * x) - cos_x / x
    for k in range(2, n + 1):
        previous, current = current, (2 * k - 1) / x * current - previous
    return current


def spherical_harmonic(l: int, m: int, theta: float, phi: float) -> complex:  # noqa: E741
    """Spherical harmonic ``Y_l^m`` for l <= 1; other orders give 1."""
    if (l, m) == (0, 0):
        return complex(0.5 * math.sqrt(1.0 / math.pi), 0.0)
    if (l, m) == (1, -1):
        factor = 0.5 * math.sqrt(3.0 / (2.0 * math.pi))
        return complex(0.0, factor * math.sin(theta)) * complex(math.cos(-phi), math.sin(-phi))
    if (l, m) == (1, 0):
        return complex(0.5 * math.sqrt(3.0 / math.pi) * math.cos(theta), 0.0)
    if (l, m) == (1, 1):
        factor = -0.5 * math.sqrt(3.0 / (2.0 * math.pi))
        return complex(0.0, factor * math.sin(theta)) * complex(math.cos(phi), math.sin(phi))
    return complex(1.0, 0.0)


def compare_solutions(numerical: WaveArray, analytical: WaveArray) -> tuple[float, float, float]:
    """L2 error, maximum error and L2 error relative to the analytical norm.

    The relative error falls back to the plain L2 error when the analytical
    field is (nearly) zero.
    """
    if numerical.shape != analytical.shape:
        raise ValueError(f"shape mismatch: {numerical.shape} vs {analytical.shape}")
    errors = np.abs(numerical.data - analytical.data)
    l2_error = float(np.sqrt(np.sum(errors**2)))
    max_error = float(errors.max()) if errors.size else 0.0
    analytical_norm = math.sqrt(analytical.norm_squared())
    relative = l2_error / analytical_norm if analytical_norm > 1e-15 else l2_error
    return l2_error, max_error, relative