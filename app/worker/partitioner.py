from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

MIN_CHUNK_SIZE = 2
DEFAULT_TARGET_WORKERS = 7


def chunk_size(total: int, target_workers: int = DEFAULT_TARGET_WORKERS) -> int:
    """Records per chunk: clamp(total // target_workers, 2, total - 1).

    Lists too short for that clamp (fewer than 3 records) stay whole.
    """
    if target_workers < 1:
        raise ValueError(f"target_workers must be >= 1, got {target_workers}")
    if total <= MIN_CHUNK_SIZE:
        return total
    return min(max(total // target_workers, MIN_CHUNK_SIZE), total - 1)


def partition(
    records: Sequence[T],
    target_workers: int = DEFAULT_TARGET_WORKERS,
) -> list[list[T]]:
    """Split records into consecutive chunks, one per worker.

    Concatenating the chunks gives back the input in its original order.
    """
    size = chunk_size(len(records), target_workers)
    if size == 0:
        return []
    return [list(records[start : start + size]) for start in range(0, len(records), size)]
