from __future__ import annotations

from .defaults import get_scheduler, set_scheduler
from .errors import BlockedError, RejectedError, SelfResolutionError, ThenableError, UnsupportedSchedulerError
from .future import Future
from .logging import set_log_level
from .models.thenable import Thenable
from .schedulers import AsyncioScheduler, Immediate

__all__ = [
    "AsyncioScheduler",
    "BlockedError",
    "Future",
    "Immediate",
    "RejectedError",
    "SelfResolutionError",
    "Thenable",
    "ThenableError",
    "UnsupportedSchedulerError",
    "get_scheduler",
    "set_log_level",
    "set_scheduler",
]
