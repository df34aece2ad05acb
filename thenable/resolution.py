from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

type Resolve = Callable[[Any], None]
type Reject = Callable[[Any], None]
type Resolver = Callable[[Resolve, Reject], Any]


class Once:
    """Single-use token, the first claim wins."""

    def __init__(self) -> None:
        self._claimed = False

    def __repr__(self) -> str:
        return f"Once(claimed={self._claimed})"

    @property
    def claimed(self) -> bool:
        return self._claimed

    def claim(self) -> bool:
        if self._claimed:
            return False

        self._claimed = True
        return True


def invoke(resolver: Resolver, resolve: Resolve, reject: Reject) -> None:
    """Call a possibly misbehaving resolver so that resolve and reject run at most once, combined.

    An exception raised by the resolver rejects, unless resolve or reject was
    already called. Makes no guarantee about asynchrony.
    """
    once = Once()

    def on_fulfilled(value: Any) -> None:
        if not once.claim():
            logger.debug("Ignoring fulfillment with %r, already settled", value)
            return
        resolve(value)

    def on_rejected(reason: Any) -> None:
        if not once.claim():
            logger.debug("Ignoring rejection with %r, already settled", reason)
            return
        reject(reason)

    try:
        resolver(on_fulfilled, on_rejected)
    except Exception as e:
        on_rejected(e)


def probe(value: Any) -> Callable[..., Any] | None:
    """Return the bound `then` of a thenable value, or None for any other value.

    Exceptions raised while looking up `then`, other than AttributeError,
    propagate to the caller.
    """
    then = getattr(value, "then", None)
    return then if callable(then) else None
