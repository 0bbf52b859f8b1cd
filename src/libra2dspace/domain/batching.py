"""Partition arithmetic for splitting import items across archives."""

from __future__ import annotations

from logging import getLogger
from math import ceil
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

#: Largest number of items DSpace should be asked to ingest in one batch.
DEFAULT_BATCH_LIMIT: Final[int] = 1000


def check_batch_options(
    *,
    parts: int | None = None,
    size: int | None = None,
    limit: int = DEFAULT_BATCH_LIMIT,
) -> None:
    if parts is not None and size is not None:
        raise ValueError("Batch count and batch size are mutually exclusive")
    if parts is not None and parts < 1:
        raise ValueError(f"Invalid batch count: {parts}")
    if size is not None and not 1 <= size <= limit:
        raise ValueError(f"Invalid batch size: {size} (must be 1..{limit})")


def plan_batches(
    count: int,
    *,
    parts: int | None = None,
    size: int | None = None,
    limit: int = DEFAULT_BATCH_LIMIT,
) -> list[int]:
    """Return the number of items in each archive.

    ``parts`` and ``size`` are mutually exclusive. Without either, items are kept in a
    single archive unless there are more than ``limit`` of them. Part sizes never
    differ by more than one; the smaller parts come first.
    """

    check_batch_options(parts=parts, size=size, limit=limit)
    if count <= 0:
        return []

    if size is None and (parts is None or parts == 1):
        if count <= limit:
            return [count]
        size = limit
    total = ceil(count / size) if size is not None else (parts or 1)
    if total > count:
        log.warning("Only %s items; reducing batch count from %s", count, total)
        total = count

    per_part = ceil(count / total)
    extra = per_part * total - count
    sizes: list[int] = []
    for _ in range(total):
        if extra > 0:
            sizes.append(per_part - 1)
            extra -= 1
        else:
            sizes.append(per_part)
    return sizes


def partition[T](items: Sequence[T], sizes: Sequence[int]) -> list[list[T]]:
    """Split ``items`` into consecutive runs of the given ``sizes``."""

    if sum(sizes) != len(items):
        raise ValueError(f"Batch sizes {list(sizes)} do not cover {len(items)} items")
    batches: list[list[T]] = []
    start = 0
    for size in sizes:
        batches.append(list(items[start : start + size]))
        start += size
    return batches
