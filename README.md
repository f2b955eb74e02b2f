# wavesim

Building blocks for simulating wave propagation in inhomogeneous media with the
modified Born series: a 3D complex array type with FFTs and arithmetic, block
and sparse arrays for domain decomposition, absorbing boundaries, source
builders, analytical reference solutions of the Helmholtz equation, and helpers
for choosing FFT-friendly grid sizes.

## Installation

```
pip install .
```

Only `numpy` is required. To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `wavesim.array`: `WaveArray`, a 3D `complex128` array. Build it with
  `WaveArray(data)`, `WaveArray.zeros(shape)`, `WaveArray.from_scalar(shape, value)`
  or `WaveArray.from_real(real_data)`. It has the properties `shape`, `ndim` and
  `is_empty`, supports `len()`, `+`, `-`, `+=`, `-=` and multiplication by a
  scalar, and offers `copy()`, `fill()`, `norm_squared()`, `inner_product()`,
  `slice(start, stop)` and `edges(widths)`.
- `wavesim.backend`: the abstract `ComputeBackend` interface (`fft_3d`,
  `ifft_3d`, `scale`, `mix`, `lerp`, `name`) and `NumpyFFTBackend`, named
  `"numpy"`. `default_backend()` returns a `NumpyFFTBackend`;
  `create_backend(name)` raises `ValueError` for unknown names.
- `wavesim.operations`: `multiply`, `divide`, `scale`, `mix`, `lerp`, `copy`,
  `fft_3d`, `ifft_3d` and `matmul(matrix, x, axis)` on wave arrays. Each returns
  a new `WaveArray`; `ifft_3d` is normalised by the number of elements.
- `wavesim.block`: `BlockArray.from_array(array, n_blocks)` splits an array into
  a grid of blocks. `get_block`, `set_block`, `block_shape`, `map_inplace` and
  `gather` work on the blocks. `compute_boundaries(shape, n_blocks)` gives the
  split points, with earlier blocks taking the remainder.
- `wavesim.sparse`: `SparseArray(data, positions, shape)` holds small patches at
  grid positions. `to_dense()` sums them into a full array, dropping anything
  outside the grid. `nnz` is the number of patches.
- `wavesim.domain_sizing`: `next_power_of_2`, `prev_power_of_2`,
  `nearest_power_of_2` (ties round up), `optimal_grid_size`,
  `optimal_domain_shape`, `is_power_of_2_shape` and `performance_tier`, which
  returns `"optimal"`, `"suboptimal"` or `"slow"`.
- `wavesim.parallel`: `BufferPool` keeps reusable zeroed arrays.
  `BoundaryExchange` packs the six faces of each subdomain, exchanges them with
  neighbours through `(subdomain, face, neighbour)` entries, and writes what was
  received on face 0 into ghost layers. It also provides `opposite_face`,
  `parallel_norm_squared` (a threaded reduction) and `parallel_field_update`.
- `wavesim.utils`: `add_absorbing_boundaries` pads a permittivity array and adds
  a linear absorbing ramp on non-periodic sides. It also provides
  `create_source`, `create_gaussian_source`, `laplace_kernel_1d` (zero-sum
  periodic kernel) and `normalize`.
- `wavesim.analytical`: `BoundaryCondition`, `RectangleParams`, `CircleParams`
  and `SphereParams` describe the geometries. `RectangularSolution` is a sum of
  sine modes. `CircularSolution` and `SphericalSolution` give lowest-order
  profiles only. The module also has `bessel_j`, `spherical_bessel_j`,
  `spherical_harmonic` (orders up to 1), `factorial` and `compare_solutions`.
- `wavesim.sources`: `SourceBuilder` makes point, plane-wave, Gaussian-beam,
  dipole, focused-beam and vortex-beam sources. Each comes back as a patch with
  its grid position. `SourcePlane` and `DipoleOrientation` choose the layout.
  `MultiSource` sums several patches into one field.

## Example

```python
from wavesim.array import WaveArray
from wavesim.operations import fft_3d, ifft_3d
from wavesim.domain_sizing import optimal_domain_shape
from wavesim.utils import add_absorbing_boundaries

shape = optimal_domain_shape([4.0, 4.0, 4.0], 0.125, True)   # (32, 32, 32)
field = WaveArray.zeros(shape)
field.data[1, 1, 1] = 2.0

recovered = ifft_3d(fft_3d(field))
print(abs(recovered.data[1, 1, 1] - 2.0) < 1e-10)

permittivity = WaveArray.from_scalar((16, 16, 16), 1.0)
padded, roi = add_absorbing_boundaries(
    permittivity, [[4, 4], [4, 4], [4, 4]], 1.0, [False, False, False]
)
print(padded.shape, roi)   # (24, 24, 24) ((4, 20), (4, 20), (4, 20))
```

Reference solutions can be compared with numerical fields:

```python
from math import pi
from wavesim.analytical import (
    BoundaryCondition, RectangleParams, RectangularSolution, compare_solutions,
)

params = RectangleParams(
    dimensions=(pi, pi, pi),
    boundary_conditions=(BoundaryCondition.DIRICHLET,) * 6,
    max_modes=(1, 1, 1),
)
solution = RectangularSolution(params)
print(solution.evaluate_at(pi / 2, pi / 2, pi / 2))   # about (1+0j)

reference = solution.evaluate_on_grid((8, 8, 8), (pi / 8,) * 3)
l2, max_err, relative = compare_solutions(reference, reference)
```

## What the package does not do

The package provides the array engine and the supporting pieces of a
simulation, but not the simulation itself. It has no Helmholtz domain with
medium and propagator operators, no iterative (preconditioned Richardson)
solver, no domain-decomposed solve and no command-line program. Fields produced
here are meant to be fed to such a solver, or compared with its results using
`compare_solutions`.