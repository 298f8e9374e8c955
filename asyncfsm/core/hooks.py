# asyncfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
import logging
from typing import Callable, Hashable, List, Optional

from asyncfsm.core.errors import ConfigurationError
from asyncfsm.core.events import StateChange

logger = logging.getLogger(__name__)

Listener = Callable[[Hashable, Hashable, str], None]
ErrorCallback = Callable[[Exception, StateChange], None]


def check_listener(listener: object) -> None:
    """
    :raises ConfigurationError: If ``listener`` cannot be called synchronously.
    """
    if not callable(listener):
        raise ConfigurationError(f"Listener {listener!r} is not callable")
    if inspect.iscoroutinefunction(listener) or inspect.iscoroutinefunction(getattr(listener, "__call__", None)):
        raise ConfigurationError(f"Listener {listener!r} is a coroutine function; listeners must be synchronous")


def _discard(awaitable: object) -> None:
    close = getattr(awaitable, "close", None)
    if close is not None:
        close()
    elif hasattr(awaitable, "cancel"):
        awaitable.cancel()


class Subscription:
    """
    Handle returned by ``EventNotifier.subscribe``. Unsubscribing is idempotent.
    """

    def __init__(self, notifier: "EventNotifier", listener: Listener) -> None:
        self._notifier = notifier
        self.listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._notifier._remove(self)

    def __repr__(self) -> str:
        return f"Subscription(listener={self.listener!r}, active={self._active})"


class EventNotifier:
    """
    Fans state-change notifications out to subscribed listeners. Listeners run
    synchronously, in subscription order. A listener that raises is logged and
    reported to ``on_error``, never to the publisher, and does not stop the
    remaining listeners from running.
    """

    def __init__(self, on_error: Optional[ErrorCallback] = None) -> None:
        """
        :param on_error: Optional side channel receiving ``(error, change)`` for
            every listener failure.
        """
        if on_error is not None and not callable(on_error):
            raise ConfigurationError("Listener error callback must be callable")
        self._subscriptions: List[Subscription] = []
        self._on_error = on_error

    def subscribe(self, listener: Listener) -> Subscription:
        """
        Register a listener called as ``listener(from_state, to_state, transition)``.

        :raises ConfigurationError: If ``listener`` is not callable or is a coroutine function.
        """
        check_listener(listener)
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, from_state: Hashable, to_state: Hashable, transition: str) -> StateChange:
        """
        Deliver one state change to every current listener.

        :return: The published StateChange record.
        """
        change = StateChange(from_state, to_state, transition)
        # Listeners may unsubscribe while being notified.
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                result = subscription.listener(from_state, to_state, transition)
                if inspect.isawaitable(result):
                    _discard(result)
                    raise TypeError(f"Listener {subscription.listener!r} returned an awaitable; listeners must be synchronous")
            except Exception as error:
                logger.exception("Listener %r failed handling %r", subscription.listener, change)
                self._forward_error(error, change)
        return change

    def _forward_error(self, error: Exception, change: StateChange) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(error, change)
        except Exception:
            logger.exception("Listener error callback failed for %r", change)

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def clear(self) -> None:
        """Drop every subscription."""
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()
