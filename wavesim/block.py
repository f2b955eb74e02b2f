"""Block decomposition of a field into a grid of sub-arrays."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from wavesim.array import WaveArray


def compute_boundaries(shape: Sequence[int], n_blocks: Sequence[int]) -> list[list[int]]:
    """Split points along each dimension; earlier blocks take the remainder."""
    if len(shape) != 3 or len(n_blocks) != 3:
        raise ValueError("shape and n_blocks must each have 3 entries")
    boundaries = []
    for size, n in zip(shape, n_blocks):
        if n <= 0:
            raise ValueError(f"number of blocks must be positive, got {n}")
        block_size, remainder = divmod(size, n)
        bounds = [0]
        for i in range(n):
            bounds.append(bounds[-1] + block_size + (1 if i < remainder else 0))
        boundaries.append(bounds)
    return boundaries


@dataclass
class BlockArray:
    """A field split into ``n_blocks[0] x n_blocks[1] x n_blocks[2]`` blocks."""

    blocks: list[list[list[WaveArray]]]
    n_blocks: tuple[int, int, int]
    shape: tuple[int, int, int]
    boundaries: list[list[int]]

    @classmethod
    def from_array(cls, array: WaveArray, n_blocks: Sequence[int]) -> BlockArray:
        """Split ``array`` into blocks."""
        n_blocks = tuple(int(n) for n in n_blocks)
        shape = array.shape
        bx, by, bz = compute_boundaries(shape, n_blocks)
        blocks = [
            [
                [
                    array.slice((x0, y0, z0), (x1, y1, z1))
                    for z0, z1 in zip(bz, bz[1:])
                ]
                for y0, y1 in zip(by, by[1:])
            ]
            for x0, x1 in zip(bx, bx[1:])
        ]
        return cls(blocks, n_blocks, shape, [bx, by, bz])

    def get_block(self, i: int, j: int, k: int) -> WaveArray:
        """The block at grid position ``(i, j, k)``."""
        return self.blocks[i][j][k]

    def set_block(self, i: int, j: int, k: int, block: WaveArray) -> None:
        """Replace the block at ``(i, j, k)`` with one of the same shape."""
        expected = self.block_shape(i, j, k)
        if block.shape != expected:
            raise ValueError(f"block shape {block.shape} does not match {expected}")
        self.blocks[i][j][k] = block

    def _positions(self):
        for i in range(self.n_blocks[0]):
            for j in range(self.n_blocks[1]):
                for k in range(self.n_blocks[2]):
                    yield i, j, k

    def gather(self) -> WaveArray:
        """Reassemble all blocks into one array."""
        result = WaveArray.zeros(self.shape)
        bx, by, bz = self.boundaries
        for i, j, k in self._positions():
            block = self.blocks[i][j][k]
            x0, y0, z0 = bx[i], by[j], bz[k]
            dx, dy, dz = block.shape
            result.data[x0 : x0 + dx, y0 : y0 + dy, z0 : z0 + dz] = block.data
        return result

    def map_inplace(self, func: Callable[[WaveArray], None]) -> None:
        """Call ``func`` on every block; ``func`` modifies the block in place."""
        for i, j, k in self._positions():
            func(self.blocks[i][j][k])

    def block_shape(self, i: int, j: int, k: int) -> tuple[int, int, int]:
        """Shape of the block at ``(i, j, k)``."""
        return self.blocks[i][j][k].shape