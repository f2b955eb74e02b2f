import math

import numpy as np
import pytest

from wavesim.analytical import (
    BoundaryCondition,
    CircleParams,
    CircularSolution,
    RectangleParams,
    RectangularSolution,
    SphereParams,
    SphericalSolution,
    bessel_j,
    compare_solutions,
    factorial,
    spherical_bessel_j,
    spherical_harmonic,
)
from wavesim.array import WaveArray

PI = math.pi
DIRICHLET6 = (BoundaryCondition.DIRICHLET,) * 6


def rect(dimensions, max_modes):
    return RectangularSolution(RectangleParams(dimensions, DIRICHLET6, max_modes))


def test_rectangular_solution_creation():
    solution = rect((1.0, 1.0, 1.0), (2, 2, 2))
    assert len(solution.eigenvalues) == 8
    assert len(solution.coefficients) == 8


def test_rectangular_solution_evaluation():
    solution = rect((PI, PI, PI), (1, 1, 1))
    assert abs(solution.evaluate_at(PI / 2, PI / 2, PI / 2)) == pytest.approx(1.0, abs=1e-10)
    assert abs(solution.evaluate_at(0.0, PI / 2, PI / 2)) == pytest.approx(0.0, abs=1e-10)


def test_rectangular_lowest_eigenvalue():
    solution = rect((PI, PI, PI), (2, 2, 2))
    assert min(solution.eigenvalues) == pytest.approx(3.0)
    assert solution.eigenvalues[0] == min(solution.eigenvalues)


def test_rectangular_grid_matches_pointwise():
    solution = rect((PI, PI, 1.0), (3, 2, 1))
    spacing = (0.3, 0.25, 0.2)
    offset = (0.1, 0.0, 0.05)
    grid = solution.evaluate_on_grid((4, 3, 2), spacing, offset)
    assert grid.shape == (4, 3, 2)
    for i, j, k in [(0, 0, 0), (3, 2, 1), (2, 1, 0)]:
        x = offset[0] + i * spacing[0]
        y = offset[1] + j * spacing[1]
        z = offset[2] + k * spacing[2]
        assert grid.data[i, j, k] == pytest.approx(solution.evaluate_at(x, y, z))


def test_set_coefficients_is_linear():
    solution = rect((PI, PI, PI), (2, 1, 1))
    before = solution.evaluate_at(0.4, 1.1, 0.7)
    solution.set_coefficients([2.0, 2.0])
    assert solution.coefficients == (2 + 0j, 2 + 0j)
    assert solution.evaluate_at(0.4, 1.1, 0.7) == pytest.approx(2 * before)
    solution.set_coefficients([0.0, 0.0])
    assert solution.evaluate_at(0.4, 1.1, 0.7) == 0


def test_set_coefficients_wrong_length():
    solution = rect((1.0, 1.0, 1.0), (2, 2, 2))
    with pytest.raises(ValueError):
        solution.set_coefficients([1.0] * 7)


def test_rectangle_params_validation():
    with pytest.raises(ValueError):
        RectangleParams((1.0, 1.0), DIRICHLET6, (1, 1, 1))
    with pytest.raises(ValueError):
        RectangleParams((1.0, 1.0, 1.0), DIRICHLET6[:5], (1, 1, 1))
    with pytest.raises(ValueError):
        RectangleParams((1.0, 1.0, 1.0), DIRICHLET6, (1, -1, 1))


def test_circular_zero_outside_radius():
    solution = CircularSolution(CircleParams(1.0, BoundaryCondition.DIRICHLET, (1, 1)))
    assert solution.evaluate_at_polar(1.5, 0.3) == 0
    assert solution.evaluate_at(2.0, 2.0) == 0


def test_circular_cartesian_matches_polar():
    solution = CircularSolution(CircleParams(2.0, BoundaryCondition.NEUMANN, (1, 1)))
    x, y = 0.6, -0.8
    expected = solution.evaluate_at_polar(math.hypot(x, y), math.atan2(y, x))
    assert solution.evaluate_at(x, y) == pytest.approx(expected)
    assert solution.evaluate_at(x, y).imag == 0


def test_circular_grid_matches_pointwise():
    solution = CircularSolution(CircleParams(1.0, BoundaryCondition.DIRICHLET, (1, 1)))
    grid = solution.evaluate_on_grid_2d((6, 5), (0.3, 0.4), (0.1, 0.2))
    assert grid.shape == (6, 5)
    for i, j in [(0, 0), (3, 2), (5, 4)]:
        x = 0.1 + (i - 3.0) * 0.3
        y = 0.2 + (j - 2.5) * 0.4
        assert grid[i, j] == pytest.approx(solution.evaluate_at(x, y))


def test_spherical_zero_outside_radius():
    solution = SphericalSolution(SphereParams(1.0, BoundaryCondition.DIRICHLET, (1, 1)))
    assert solution.evaluate_at_spherical(2.0, 0.5, 0.5) == 0
    assert solution.evaluate_at(1.0, 1.0, 1.0) == 0


def test_spherical_grid_matches_pointwise():
    solution = SphericalSolution(SphereParams(1.5, BoundaryCondition.DIRICHLET, (1, 1)))
    grid = solution.evaluate_on_grid((4, 4, 3), (0.3, 0.3, 0.3), (0.05, 0.05, 0.05))
    assert grid.shape == (4, 4, 3)
    for i, j, k in [(0, 0, 0), (1, 2, 1), (3, 3, 2)]:
        x = 0.05 + (i - 2.0) * 0.3
        y = 0.05 + (j - 2.0) * 0.3
        z = 0.05 + (k - 1.5) * 0.3
        assert grid.data[i, j, k] == pytest.approx(solution.evaluate_at(x, y, z))


def test_bessel_function():
    assert bessel_j(0, 0.0) == pytest.approx(1.0, abs=1e-10)
    assert bessel_j(1, 0.0) == pytest.approx(0.0, abs=1e-10)
    assert bessel_j(0, 1.0) == pytest.approx(0.7651976866, abs=1e-8)


def test_bessel_odd_order_is_odd():
    assert bessel_j(1, -1.3) == pytest.approx(-bessel_j(1, 1.3))
    assert bessel_j(2, -1.3) == pytest.approx(bessel_j(2, 1.3))


def test_spherical_bessel_function():
    assert spherical_bessel_j(0, 0.0) == pytest.approx(1.0, abs=1e-10)
    assert spherical_bessel_j(1, 0.0) == pytest.approx(0.0, abs=1e-10)
    assert spherical_bessel_j(0, PI) == pytest.approx(0.0, abs=1e-10)
    assert spherical_bessel_j(4, 0.0) == 0.0


def test_spherical_bessel_negative_order():
    with pytest.raises(ValueError):
        spherical_bessel_j(-1, 1.0)


def test_spherical_harmonic_values():
    assert spherical_harmonic(0, 0, 0.3, 0.7) == pytest.approx(0.5 * math.sqrt(1.0 / PI))
    assert spherical_harmonic(3, 2, 0.3, 0.7) == 1


def test_spherical_harmonic_conjugate_symmetry():
    theta, phi = 0.9, 1.7
    plus = spherical_harmonic(1, 1, theta, phi)
    minus = spherical_harmonic(1, -1, theta, phi)
    assert minus == pytest.approx(plus.conjugate())
    assert abs(plus) == pytest.approx(abs(minus))


def test_factorial():
    assert factorial(0) == 1.0
    assert factorial(10) == float(math.factorial(10))
    with pytest.raises(ValueError):
        factorial(-1)


def test_solution_comparison():
    shape = (4, 4, 4)
    numerical = WaveArray.from_scalar(shape, complex(1.0, 0.1))
    analytical = WaveArray.from_scalar(shape, complex(1.0, 0.0))
    l2_error, max_error, rel_error = compare_solutions(numerical, analytical)
    assert l2_error > 0.0
    assert max_error > 0.0
    assert rel_error > 0.0
    assert max_error == pytest.approx(0.1)
    assert rel_error == pytest.approx(l2_error / 8.0)


def test_solution_comparison_identical_and_zero_reference():
    field = WaveArray(np.arange(8, dtype=float).reshape(2, 2, 2))
    assert compare_solutions(field, field.copy()) == (0.0, 0.0, 0.0)
    l2, _, rel = compare_solutions(field, WaveArray.zeros((2, 2, 2)))
    assert rel == l2


def test_solution_comparison_shape_mismatch():
    with pytest.raises(ValueError):
        compare_solutions(WaveArray.zeros((2, 2, 2)), WaveArray.zeros((2, 2, 3)))