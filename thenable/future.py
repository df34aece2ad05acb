from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Literal, Self

from thenable.defaults import get_scheduler
from thenable.errors import BlockedError, RejectedError, SelfResolutionError, UnsupportedSchedulerError
from thenable.resolution import Reject, Resolve, Resolver, invoke, probe
from thenable.schedulers import Immediate

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable

    from thenable.models.scheduler import Scheduler
    from thenable.models.thenable import Thenable

logger = logging.getLogger(__name__)

type State = Literal["PENDING", "FULFILLED", "REJECTED"]

_ids = itertools.count()

DRAIN_INTERVAL = 0.001  # seconds between drains of an Immediate scheduler while awaiting


@dataclass(frozen=True)
class Waiter:
    on_fulfilled: Callable[[Any], Any] | None
    on_rejected: Callable[[Any], Any] | None
    resolve: Resolve
    reject: Reject


class Future[T]:
    """Single-assignment container for the eventual outcome of an asynchronous computation.

    The resolver is called synchronously with two capabilities, `resolve` and
    `reject`; the first one called settles the future. Continuations registered
    with `then` always run later, through the scheduler, in registration order.
    """

    def __init__(self, resolver: Resolver, *, scheduler: Scheduler | None = None) -> None:
        if not callable(resolver):
            msg = f"resolver must be callable, got {type(resolver).__name__}"
            raise TypeError(msg)

        self._id = next(_ids)
        self._state: State = "PENDING"
        self._value: Any = None
        self._waiters: list[Waiter] = []
        self._scheduler = scheduler

        invoke(resolver, self._resolve, self._reject)

    def __repr__(self) -> str:
        return f"Future(id={self._id}, state={self._state})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def state(self) -> State:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state == "PENDING"

    @property
    def fulfilled(self) -> bool:
        return self._state == "FULFILLED"

    @property
    def rejected(self) -> bool:
        return self._state == "REJECTED"

    @property
    def value(self) -> Any:
        """The fulfillment value or the rejection reason, None while pending."""
        return self._value

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler or get_scheduler()

    # chaining

    def then(
        self,
        on_fulfilled: Callable[[T], Any] | None = None,
        on_rejected: Callable[[Any], Any] | None = None,
    ) -> Future[Any]:
        return Future(
            lambda resolve, reject: self._register(
                Waiter(
                    on_fulfilled if callable(on_fulfilled) else None,
                    on_rejected if callable(on_rejected) else None,
                    resolve,
                    reject,
                )
            ),
            scheduler=self._scheduler,
        )

    def catch(self, on_rejected: Callable[[Any], Any]) -> Future[Any]:
        return self.then(None, on_rejected)

    def always(self, callback: Callable[[], Any]) -> Future[T]:
        """Run callback on either outcome, then settle like this future.

        The callback result is waited on when it is a thenable. If the callback
        raises, or its result rejects, that rejection replaces the original
        outcome.
        """
        return self.then(
            lambda value: Future.resolve(callback(), scheduler=self._scheduler).then(lambda _: value),
            lambda reason: Future.resolve(callback(), scheduler=self._scheduler).then(
                lambda _: Future.reject(reason, scheduler=self._scheduler)
            ),
        )

    # combinators

    @classmethod
    def resolve(cls, value: T | Thenable[T], *, scheduler: Scheduler | None = None) -> Self:
        if type(value) is cls:
            return value
        return cls(lambda resolve, _: resolve(value), scheduler=scheduler)

    @classmethod
    def reject(cls, reason: Any, *, scheduler: Scheduler | None = None) -> Self:
        return cls(lambda _, reject: reject(reason), scheduler=scheduler)

    @classmethod
    def all(cls, futures: Iterable[Any | Thenable[Any]], *, scheduler: Scheduler | None = None) -> Self:
        """Fulfill with the results of all futures in input order, or reject with the first rejection."""

        def resolver(resolve: Resolve, reject: Reject) -> None:
            values = list(futures)
            if not values:
                resolve([])
                return

            remaining = len(values)

            def settle(i: int, value: Any) -> None:
                nonlocal remaining

                try:
                    then = probe(value)
                except Exception as e:
                    reject(e)
                    return

                if then is not None:
                    invoke(then, lambda v: settle(i, v), reject)
                    return

                values[i] = value
                remaining -= 1
                if remaining == 0:
                    resolve(values)

            for i, value in enumerate(values):
                settle(i, value)

        return cls(resolver, scheduler=scheduler)

    @classmethod
    def race(cls, futures: Iterable[Any | Thenable[Any]], *, scheduler: Scheduler | None = None) -> Self:
        """Settle like whichever future settles first; an empty input never settles."""

        def resolver(resolve: Resolve, reject: Reject) -> None:
            for future in futures:
                cls.resolve(future, scheduler=scheduler).then(resolve, reject)

        return cls(resolver, scheduler=scheduler)

    # host integration

    def result(self) -> T:
        """Drain the Immediate scheduler until settled, then return the value or raise the reason."""
        scheduler = self.scheduler
        if not isinstance(scheduler, Immediate):
            raise UnsupportedSchedulerError(scheduler)

        while self.pending and scheduler.run():
            pass

        match self._state:
            case "FULFILLED":
                return self._value
            case "REJECTED":
                raise _as_exception(self._value)
            case _:
                raise BlockedError(self._id)

    def __await__(self) -> Generator[Any, None, T]:
        """Await the outcome from asyncio code.

        The outcome is handed to the awaiting loop with `call_soon_threadsafe`,
        whichever thread the scheduler runs on. An Immediate scheduler is
        drained from the awaiting loop until the outcome arrives.
        """
        loop = asyncio.get_running_loop()
        f = loop.create_future()
        self.then(
            lambda value: loop.call_soon_threadsafe(_set_result, f, value),
            lambda reason: loop.call_soon_threadsafe(_set_exception, f, reason),
        )

        scheduler = self.scheduler
        if isinstance(scheduler, Immediate):
            loop.call_soon(_drain, loop, scheduler, f)

        return f.__await__()

    # state machine

    def _register(self, waiter: Waiter) -> None:
        if self._state == "PENDING":
            self._waiters.append(waiter)
        else:
            self._dispatch(waiter)

    def _resolve(self, value: Any) -> None:
        if self._state != "PENDING":
            logger.debug("Ignoring fulfillment of %r with %r, already settled", self, value)
            return

        try:
            if value is self:
                raise SelfResolutionError(self._id)
            then = probe(value)
        except Exception as e:
            logger.debug("Rejecting %r, resolution with %r failed: %s", self, value, e)
            self._reject(e)
            return

        if then is not None:
            # adopt the outcome of the thenable
            invoke(then, self._resolve, self._reject)
            return

        self._settle("FULFILLED", value)

    def _reject(self, reason: Any) -> None:
        if self._state != "PENDING":
            logger.debug("Ignoring rejection of %r with %r, already settled", self, reason)
            return

        self._settle("REJECTED", reason)

    def _settle(self, state: Literal["FULFILLED", "REJECTED"], value: Any) -> None:
        self._state = state
        self._value = value
        logger.debug("%r settled with %r, dispatching %d waiter(s)", self, value, len(self._waiters))

        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            self._dispatch(waiter)

    # dispatch

    def _dispatch(self, waiter: Waiter) -> None:
        self.scheduler.schedule(partial(self._run, waiter))

    def _run(self, waiter: Waiter) -> None:
        assert not self.pending, "Waiters must only run once the future has settled."

        if self.fulfilled:
            callback, settle = waiter.on_fulfilled, waiter.resolve
        else:
            callback, settle = waiter.on_rejected, waiter.reject

        if callback is None:
            settle(self._value)
            return

        try:
            result = callback(self._value)
        except Exception as e:
            waiter.reject(e)
            return

        waiter.resolve(result)


def _as_exception(reason: Any) -> BaseException:
    # In python, only exceptions may be raised, other rejection reasons are wrapped.
    return reason if isinstance(reason, BaseException) else RejectedError(reason)


def _drain(loop: asyncio.AbstractEventLoop, scheduler: Immediate, f: asyncio.Future[Any]) -> None:
    scheduler.run()
    if not f.done():
        # the outcome may be produced later by the loop, keep polling
        loop.call_later(DRAIN_INTERVAL, _drain, loop, scheduler, f)


def _set_result(f: asyncio.Future[Any], value: Any) -> None:
    if not f.done():
        f.set_result(value)


def _set_exception(f: asyncio.Future[Any], reason: Any) -> None:
    if not f.done():
        f.set_exception(_as_exception(reason))
