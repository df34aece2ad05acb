from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from thenable import Immediate, set_scheduler

if TYPE_CHECKING:
    from collections.abc import Generator


def pytest_configure() -> None:
    logging.basicConfig(level=logging.ERROR)  # set log levels very high for tests


@pytest.fixture(autouse=True)
def scheduler() -> Generator[Immediate]:
    s = Immediate()
    previous = set_scheduler(s)

    yield s

    set_scheduler(previous)
