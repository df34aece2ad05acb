from __future__ import annotations

import logging

from thenable.models.scheduler import Scheduler
from thenable.schedulers import Immediate

logger = logging.getLogger(__name__)

_scheduler: Scheduler = Immediate()


def get_scheduler() -> Scheduler:
    return _scheduler


def set_scheduler(scheduler: Scheduler | None) -> Scheduler:
    """Replace the process-wide default scheduler and return the previous one.

    Passing None installs a fresh Immediate scheduler. Futures constructed with
    an explicit scheduler are not affected.
    """
    global _scheduler  # noqa: PLW0603

    if scheduler is not None and not isinstance(scheduler, Scheduler):
        msg = f"scheduler must be `Scheduler | None`, got {type(scheduler).__name__}"
        raise TypeError(msg)

    previous, _scheduler = _scheduler, scheduler or Immediate()
    logger.debug("Default scheduler set to %r (was %r)", _scheduler, previous)
    return previous
