"""Sparse collection of small source patches placed in a larger grid."""

from __future__ import annotations

from collections.abc import Sequence

from wavesim.array import WaveArray, _as_shape


class SparseArray:
    """Patches of data at given positions inside a grid of ``shape``."""

    def __init__(
        self,
        data: Sequence[WaveArray],
        positions: Sequence[Sequence[int]],
        shape: Sequence[int],
    ) -> None:
        if len(data) != len(positions):
            raise ValueError("data and positions must have the same length")
        self.data = list(data)
        self.positions = [_as_shape(p) for p in positions]
        self.shape = _as_shape(shape)

    @classmethod
    def empty(cls, shape: Sequence[int]) -> SparseArray:
        """A sparse array with no patches."""
        return cls([], [], shape)

    def __repr__(self) -> str:
        return f"SparseArray(nnz={self.nnz}, shape={self.shape})"

    def to_dense(self) -> WaveArray:
        """Sum all patches into a dense array; parts outside the grid are dropped."""
        dense = WaveArray.zeros(self.shape)
        for patch, position in zip(self.data, self.positions):
            extent = [
                max(0, min(size, limit - start))
                for size, start, limit in zip(patch.shape, position, self.shape)
            ]
            target = tuple(slice(start, start + n) for start, n in zip(position, extent))
            source = tuple(slice(0, n) for n in extent)
            dense.data[target] += patch.data[source]
        return dense

    @property
    def nnz(self) -> int:
        """Number of stored patches."""
        return len(self.data)