"""Helpers for choosing grid sizes that are powers of two."""

from __future__ import annotations

import math
from collections.abc import Sequence


def _is_power_of_2(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def next_power_of_2(n: int) -> int:
    """Smallest power of two not below ``n`` (1 for 0)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def prev_power_of_2(n: int) -> int:
    """Largest power of two not above ``n`` (0 for 0)."""
    if n <= 0:
        return 0
    return 1 << (n.bit_length() - 1)


def nearest_power_of_2(n: int) -> int:
    """Closest power of two to ``n``; ties round up."""
    if n <= 0:
        return 0
    if n == 1:
        return 1
    upper = next_power_of_2(n)
    lower = prev_power_of_2(n)
    return upper if upper - n <= n - lower else lower


def _round_to_count(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        raise ValueError("grid size is not finite")
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded) if value > 0 else 0


def optimal_grid_size(physical_size: float, pixel_size: float, prefer_larger: bool = False) -> int:
    """Power-of-two grid size for ``physical_size / pixel_size`` pixels."""
    if pixel_size == 0:
        raise ValueError("pixel_size must be non-zero")
    naive = _round_to_count(physical_size / pixel_size)
    return next_power_of_2(naive) if prefer_larger else nearest_power_of_2(naive)


def optimal_domain_shape(
    physical_shape: Sequence[float], pixel_size: float, prefer_larger: bool = False
) -> tuple[int, int, int]:
    """Power-of-two grid shape for a physical box."""
    if len(physical_shape) != 3:
        raise ValueError("physical_shape must have 3 entries")
    x, y, z = (optimal_grid_size(size, pixel_size, prefer_larger) for size in physical_shape)
    return x, y, z


def is_power_of_2_shape(shape: Sequence[int]) -> bool:
    """True when every dimension is a positive power of two."""
    return all(_is_power_of_2(dim) for dim in shape)


def performance_tier(shape: Sequence[int]) -> str:
    """"optimal", "suboptimal" or "slow" depending on how many dimensions are powers of two."""
    count = sum(1 for dim in shape if _is_power_of_2(dim))
    if count == len(shape):
        return "optimal"
    if count == 0:
        return "slow"
    return "suboptimal"