from __future__ import annotations

from .immediate import Immediate
from .loop import AsyncioScheduler

__all__ = ["AsyncioScheduler", "Immediate"]
