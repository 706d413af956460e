"""Synchronous change notification for the recipe store."""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from typing import Generic, TypeVar

SenderT = TypeVar("SenderT")

ChangeHandler = Callable[[SenderT], object]


class ChangeNotifier(Generic[SenderT]):
    """Ordered list of handlers called with the sender after each change.

    Handlers run in subscription order, in the caller's thread, before
    :meth:`notify` returns. An exception from a handler propagates to the
    caller of :meth:`notify` and the remaining handlers are skipped.

    Example:
        >>> notifier: ChangeNotifier[str] = ChangeNotifier()
        >>> seen = []
        >>> _ = notifier.subscribe(seen.append)
        >>> notifier.notify("store")
        >>> seen
        ['store']
    """

    def __init__(self) -> None:
        self._handlers: list[ChangeHandler[SenderT]] = []

    def subscribe(self, handler: ChangeHandler[SenderT]) -> ChangeHandler[SenderT]:
        """Register a handler. Returns it unchanged so this works as a decorator.

        Registering the same handler twice makes it fire twice.
        """
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: ChangeHandler[SenderT]) -> None:
        """Remove the earliest registration of a handler; unknown handlers are ignored."""
        with contextlib.suppress(ValueError):
            self._handlers.remove(handler)

    def notify(self, sender: SenderT) -> None:
        # Snapshot so handlers may (un)subscribe while being notified
        for handler in tuple(self._handlers):
            handler(sender)

    def __len__(self) -> int:
        return len(self._handlers)
