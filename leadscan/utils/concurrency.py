"""Settle-all fan-out helper.

Every fan-out in the pipeline waits for all sub-tasks, including failed
ones, and then filters explicitly on success.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Settled(Generic[T]):
    """Result of one settled sub-task: a value or the exception it raised."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(aws: Iterable[Awaitable[T]]) -> list[Settled[T]]:
    """Await every awaitable concurrently and return one ``Settled`` per input.

    Order matches the input order. No failure cancels its siblings.
    """
    results: list[Any] = await asyncio.gather(*aws, return_exceptions=True)
    settled: list[Settled[T]] = []
    for res in results:
        if isinstance(res, asyncio.CancelledError):
            raise res
        if isinstance(res, BaseException):
            settled.append(Settled(error=res))
        else:
            settled.append(Settled(value=res))
    return settled


def successful(settled: Iterable[Settled[T]]) -> list[T]:
    """Values of the sub-tasks that succeeded and produced something."""
    return [s.value for s in settled if s.ok and s.value is not None]
