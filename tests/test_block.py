import numpy as np
import pytest

from wavesim.array import WaveArray
from wavesim.block import BlockArray, compute_boundaries


def _random_field(shape, seed=0):
    rng = np.random.default_rng(seed)
    return WaveArray(rng.normal(size=shape) + 1j * rng.normal(size=shape))


def test_block_array_creation():
    array = WaveArray.from_scalar((10, 10, 10), 1.0)
    block_array = BlockArray.from_array(array, (2, 2, 2))
    assert block_array.n_blocks == (2, 2, 2)
    assert block_array.shape == (10, 10, 10)


def test_block_boundaries():
    boundaries = compute_boundaries((10, 10, 10), (2, 2, 2))
    assert boundaries[0] == [0, 5, 10]
    assert boundaries[1] == [0, 5, 10]
    assert boundaries[2] == [0, 5, 10]


def test_block_array_gather():
    array = WaveArray.from_scalar((10, 10, 10), 1.0)
    gathered = BlockArray.from_array(array, (2, 2, 2)).gather()
    assert gathered.shape == array.shape
    assert gathered.data[0, 0, 0] == array.data[0, 0, 0]


@pytest.mark.parametrize("shape,n_blocks", [((10, 3, 7), (3, 2, 1)), ((5, 9, 4), (2, 4, 3))])
def test_uneven_boundaries_invariants(shape, n_blocks):
    boundaries = compute_boundaries(shape, n_blocks)
    for size, n, bounds in zip(shape, n_blocks, boundaries):
        assert len(bounds) == n + 1
        assert bounds[0] == 0 and bounds[-1] == size
        widths = [b - a for a, b in zip(bounds, bounds[1:])]
        assert max(widths) - min(widths) <= 1
        assert widths == sorted(widths, reverse=True)


@pytest.mark.parametrize("n_blocks", [(1, 1, 1), (3, 2, 1), (2, 4, 3)])
def test_gather_roundtrip(n_blocks):
    array = _random_field((7, 9, 5))
    block_array = BlockArray.from_array(array, n_blocks)
    assert np.array_equal(block_array.gather().data, array.data)


def test_blocks_are_copies():
    array = _random_field((4, 4, 4))
    block_array = BlockArray.from_array(array, (2, 2, 2))
    original = array.data[0, 0, 0]
    block_array.get_block(0, 0, 0).data[0, 0, 0] = 99.0
    assert array.data[0, 0, 0] == original


def test_block_shape_matches_boundaries():
    block_array = BlockArray.from_array(WaveArray.zeros((7, 9, 5)), (2, 4, 3))
    bx, by, bz = block_array.boundaries
    for i in range(2):
        for j in range(4):
            for k in range(3):
                assert block_array.block_shape(i, j, k) == (
                    bx[i + 1] - bx[i],
                    by[j + 1] - by[j],
                    bz[k + 1] - bz[k],
                )


def test_map_inplace_affects_gather():
    array = _random_field((6, 6, 6))
    block_array = BlockArray.from_array(array, (2, 3, 2))
    block_array.map_inplace(lambda block: block.__imul__(2.0))
    assert np.allclose(block_array.gather().data, 2.0 * array.data)


def test_set_block():
    block_array = BlockArray.from_array(WaveArray.zeros((4, 4, 4)), (2, 2, 2))
    replacement = WaveArray.from_scalar((2, 2, 2), 3.0)
    block_array.set_block(1, 0, 1, replacement)
    gathered = block_array.gather()
    assert np.all(gathered.data[2:4, 0:2, 2:4] == 3.0)
    assert gathered.norm_squared() == pytest.approx(replacement.norm_squared())


def test_set_block_wrong_shape():
    block_array = BlockArray.from_array(WaveArray.zeros((4, 4, 4)), (2, 2, 2))
    with pytest.raises(ValueError):
        block_array.set_block(0, 0, 0, WaveArray.zeros((3, 2, 2)))


def test_zero_blocks_rejected():
    with pytest.raises(ValueError):
        compute_boundaries((4, 4, 4), (0, 1, 1))