# -*- coding: utf-8 -*-
"""Typed synchronous publish/subscribe for editor state changes.

Handlers run in the publisher's call stack, in the order they subscribed.
A handler registered for a base event class receives every subclass.
Publishing from inside a handler is allowed and delivered immediately
(no reentrancy guard); subscriptions made during a publish only see later
events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from clickcast.models.presentation import Slide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """Base class of every notification."""


@dataclass(frozen=True)
class PresentationReplaced(Event):
    """A new project was created or loaded."""

    slide_count: int


@dataclass(frozen=True)
class SlideAdded(Event):
    """A new slide is available at ``index``."""

    index: int


@dataclass(frozen=True)
class SlideRemoved(Event):
    index: int
    slide: Slide


@dataclass(frozen=True)
class SlidesSwapped(Event):
    first: int
    second: int


@dataclass(frozen=True)
class ActionEdited(Event):
    slide_index: int
    action_index: int
    x: float
    y: float


@dataclass(frozen=True)
class CanvasResized(Event):
    width: int
    height: int


@dataclass(frozen=True)
class SelectionChanged(Event):
    """Selected slide changed; -1 means nothing is selected."""

    index: int


@dataclass(frozen=True)
class ActionSelected(Event):
    index: int


@dataclass(frozen=True)
class CaptureModeChanged(Event):
    active: bool


E = TypeVar("E", bound=Event)
Handler = Callable[[Any], None]


class EventBus:
    """Deliver events to subscribers synchronously, in subscription order."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[type[Event], Handler]] = []

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> Callable[[E], None]:
        self._subscriptions.append((event_type, handler))
        return handler

    def unsubscribe(self, event_type: type[Event], handler: Handler) -> bool:
        for index, (registered_type, registered) in enumerate(self._subscriptions):
            if registered_type is event_type and registered == handler:
                del self._subscriptions[index]
                return True
        return False

    def unsubscribe_all(self, event_type: type[Event] | None = None) -> None:
        if event_type is None:
            self._subscriptions.clear()
            return
        self._subscriptions = [item for item in self._subscriptions if item[0] is not event_type]

    def publish(self, event: Event) -> None:
        logger.debug("Publishing %s", event)
        for event_type, handler in list(self._subscriptions):
            if isinstance(event, event_type):
                handler(event)

    def subscriber_count(self, event_type: type[Event] | None = None) -> int:
        if event_type is None:
            return len(self._subscriptions)
        return sum(1 for registered_type, _ in self._subscriptions if registered_type is event_type)
