"""Helpers for consuming sync or async entry/id streams."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import TypeVar, Union

T = TypeVar("T")

Stream = Union[Iterable[T], AsyncIterable[T]]


async def iterate(source: Stream[T]) -> AsyncIterator[T]:
    """Yield items from *source* in order, whether it is sync or async."""
    if isinstance(source, AsyncIterable):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


async def empty() -> AsyncIterator[T]:
    """An async iterator that yields nothing."""
    return
    yield
