"""Partitioning of bulk payloads."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(values: Sequence[T], chunk_size: int) -> List[List[T]]:
    """Split ``values`` into consecutive lists of at most ``chunk_size`` elements."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    return [list(values[i : i + chunk_size]) for i in range(0, len(values), chunk_size)]
