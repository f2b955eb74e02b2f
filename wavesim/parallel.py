"""Helpers for exchanging subdomain boundaries and for bulk field reductions."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from wavesim.array import WaveArray

NUM_FACES = 6

_OPPOSITE_FACES = {0: 1, 1: 0, 2: 3, 3: 2, 4: 5, 5: 4}


def opposite_face(face: int) -> int:
    """Index of the face opposite ``face`` (left/right, front/back, bottom/top)."""
    try:
        return _OPPOSITE_FACES[face]
    except KeyError:
        raise ValueError(f"invalid face index {face!r}; expected 0..5") from None


def _empty_buffer() -> np.ndarray:
    return np.empty(0, dtype=np.complex128)


class BufferPool:
    """A fixed set of reusable zero-initialised work arrays."""

    def __init__(self, num_buffers: int, shape: Sequence[int]) -> None:
        if num_buffers < 0:
            raise ValueError(f"number of buffers must be non-negative, got {num_buffers}")
        self._buffers = [WaveArray.zeros(shape) for _ in range(num_buffers)]

    def __len__(self) -> int:
        return len(self._buffers)

    def get(self, index: int) -> WaveArray:
        """The buffer at ``index``; changes to it persist in the pool."""
        return self._buffers[index]


class BoundaryExchange:
    """Packs the six faces of each subdomain and hands them to its neighbours.

    Faces are numbered 0/1 for the low/high end of axis 0, 2/3 for axis 1 and
    4/5 for axis 2.
    """

    def __init__(self, num_subdomains: int, max_boundary_size: int) -> None:
        if num_subdomains < 0:
            raise ValueError(f"number of subdomains must be non-negative, got {num_subdomains}")
        self.num_subdomains = num_subdomains
        self.max_boundary_size = max_boundary_size
        self.send_buffers: list[list[np.ndarray]] = [
            [_empty_buffer() for _ in range(NUM_FACES)] for _ in range(num_subdomains)
        ]
        self.recv_buffers: list[list[np.ndarray]] = [
            [_empty_buffer() for _ in range(NUM_FACES)] for _ in range(num_subdomains)
        ]

    def pack_boundaries(self, subdomain_id: int, field: WaveArray) -> None:
        """Copy the outer faces of ``field`` into the send buffers of a subdomain."""
        data = field.data
        if 0 in data.shape:
            raise ValueError(f"cannot pack boundaries of an empty field {field.shape}")
        faces = (
            data[0, :, :],
            data[-1, :, :],
            data[:, 0, :],
            data[:, -1, :],
            data[:, :, 0],
            data[:, :, -1],
        )
        self.send_buffers[subdomain_id] = [face.ravel().copy() for face in faces]

    def exchange(self, neighbor_map: Iterable[tuple[int, int, int]]) -> None:
        """Deliver faces according to ``(subdomain, face, neighbour)`` entries.

        Each subdomain receives on ``face`` what its neighbour packed on the
        opposite face.
        """
        for subdomain, face, neighbor in neighbor_map:
            source = self.send_buffers[neighbor][opposite_face(face)]
            self.recv_buffers[subdomain][face] = source.copy()

    def unpack_boundaries(self, subdomain_id: int, field: WaveArray, ghost_width: int) -> None:
        """Write the data received on face 0 into the first ``ghost_width`` layers."""
        received = self.recv_buffers[subdomain_id][0]
        if received.size == 0:
            return
        nx, ny, nz = field.shape
        count = ny * nz
        if received.size < count:
            raise ValueError(
                f"received {received.size} values but the face needs {count}"
            )
        plane = received[:count].reshape(ny, nz)
        layers = min(max(ghost_width, 0), nx)
        field.data[:layers, :, :] = plane


def _chunk_norm(chunk: np.ndarray) -> float:
    return float(np.sum(chunk.real**2 + chunk.imag**2))


def parallel_norm_squared(field: WaveArray) -> float:
    """Sum of squared magnitudes, reduced over chunks in worker threads."""
    flat = field.data.reshape(-1)
    if flat.size == 0:
        return 0.0
    workers = min(os.cpu_count() or 1, flat.size)
    chunks = [chunk for chunk in np.array_split(flat, workers) if chunk.size]
    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        return float(sum(pool.map(_chunk_norm, chunks)))


def parallel_field_update(
    field: WaveArray, update_fn: Callable[[int, int, int, complex], complex]
) -> None:
    """Replace each element with ``update_fn(i, j, k, value)`` in place."""
    data = field.data
    for (i, j, k), value in np.ndenumerate(data):
        data[i, j, k] = update_fn(i, j, k, complex(value))