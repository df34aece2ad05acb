from __future__ import annotations

from .errors import BlockedError, RejectedError, SelfResolutionError, ThenableError, UnsupportedSchedulerError

__all__ = ["BlockedError", "RejectedError", "SelfResolutionError", "ThenableError", "UnsupportedSchedulerError"]
