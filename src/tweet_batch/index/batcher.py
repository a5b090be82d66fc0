from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator, TypeVar


T = TypeVar("T")


def chunks(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Lazily split ``items`` into consecutive lists of at most ``size``.

    The returned iterator is finite and single-use; the input is consumed one
    chunk at a time, so only the chunk being yielded is materialized.
    """
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return _iter_chunks(iter(items), size)


def _iter_chunks(iterator: Iterator[T], size: int) -> Iterator[list[T]]:
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk
