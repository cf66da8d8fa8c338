"""
Explicit result channel between the correlation core and its callers.

An empty Ok means "nothing correlated"; an Err means the computation failed.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str
    error: Any = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


async def run_safely(awaitable: Awaitable[T]) -> Result:
    """Await a core operation, turning any exception into Err."""
    try:
        return Ok(await awaitable)
    except Exception as e:
        print(f"[Correlation] Computation failed: {e}")
        return Err(reason=str(e) or type(e).__name__, error=e)
