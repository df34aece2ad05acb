from __future__ import annotations

from typing import Any


class ThenableError(Exception):
    def __init__(self, mesg: str, code: int) -> None:
        super().__init__(mesg)
        self.mesg = mesg
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code:03d}] {self.mesg}"

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.mesg, self.code))


# Error codes 100-199


class SelfResolutionError(ThenableError, TypeError):
    def __init__(self, future_id: int) -> None:
        super().__init__(f"Future {future_id} cannot be resolved with itself", 100)
        self.future_id = future_id

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.future_id,))


# Error codes 200-299


class RejectedError(ThenableError):
    def __init__(self, reason: Any) -> None:
        super().__init__(f"Future rejected with {reason!r}", 200)
        self.reason = reason

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.reason,))


# Error codes 300-399


class BlockedError(ThenableError):
    def __init__(self, future_id: int) -> None:
        super().__init__(f"Future {future_id} is still pending and the scheduler has nothing left to run", 300)
        self.future_id = future_id

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.future_id,))


class UnsupportedSchedulerError(ThenableError):
    def __init__(self, scheduler: Any) -> None:
        super().__init__(f"Cannot drive {type(scheduler).__name__} to completion, an Immediate scheduler is required", 301)
        self.scheduler = scheduler

    def __reduce__(self) -> str | tuple[Any, ...]:
        return (self.__class__, (self.scheduler,))
