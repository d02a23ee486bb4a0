"""Event payloads and the synchronous dispatcher that routes them.

Each event is a frozen dataclass and its class is its tag. A dispatcher is an
ordinary object owned by whoever builds the application; nothing here is
global.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Generic, List, Tuple, Type, TypeVar

from .mesh import Mesh

logger = logging.getLogger(__name__)

Point2 = Tuple[float, float]


class Event:
    """Marker base class for everything that goes through a dispatcher."""


# ----------------------------------------------------------------------
# Input events


@dataclass(frozen=True)
class PointPlaced(Event):
    """A click in sketch space; the scene routes it by the current edit mode."""

    position: Point2


@dataclass(frozen=True)
class ProfilePointPlaced(Event):
    position: Point2


@dataclass(frozen=True)
class AxisPointPlaced(Event):
    position: Point2


@dataclass(frozen=True)
class LastPointRemoved(Event):
    pass


@dataclass(frozen=True)
class CurveCleared(Event):
    pass


@dataclass(frozen=True)
class RebuildRequested(Event):
    pass


@dataclass(frozen=True)
class ModeToggled(Event):
    pass


@dataclass(frozen=True)
class ViewToggled(Event):
    pass


# ----------------------------------------------------------------------
# Output events


@dataclass(frozen=True, eq=False)
class MeshRebuilt(Event):
    mesh: Mesh


@dataclass(frozen=True)
class RebuildFailed(Event):
    error: Exception


E = TypeVar("E", bound=Event)
Handler = Callable[[E], None]


class Subscription(Generic[E]):
    """Handle returned by :meth:`EventDispatcher.subscribe`."""

    def __init__(self, dispatcher: "EventDispatcher", event_type: Type[E], handler: Handler):
        self._dispatcher = dispatcher
        self.event_type = event_type
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._dispatcher._remove(self)
            self.active = False

    def __enter__(self) -> "Subscription[E]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()


class EventDispatcher:
    """Ordered, single-threaded publish/subscribe.

    Handlers for an event type run in subscription order. Events published
    while a handler is running are queued and delivered once the current
    event has reached all of its handlers, so delivery order always matches
    publish order.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[Type[Event], List[Subscription]] = {}
        self._pending: Deque[Event] = deque()
        self._dispatching = False

    def subscribe(self, event_type: Type[E], handler: Handler) -> Subscription[E]:
        if not (isinstance(event_type, type) and issubclass(event_type, Event)):
            raise TypeError(f"event_type must be an Event subclass, got {event_type!r}")
        subscription = Subscription(self, event_type, handler)
        self._subscriptions.setdefault(event_type, []).append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        handlers = self._subscriptions.get(subscription.event_type, [])
        if subscription in handlers:
            handlers.remove(subscription)

    def publish(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError(f"publish expects an Event, got {type(event).__name__}")
        self._pending.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                self._deliver(self._pending.popleft())
        finally:
            self._dispatching = False
            self._pending.clear()

    def _deliver(self, event: Event) -> None:
        subscriptions = list(self._subscriptions.get(type(event), []))
        if not subscriptions:
            logger.debug("no handlers for %s", type(event).__name__)
        for subscription in subscriptions:
            if subscription.active:
                subscription.handler(event)


__all__ = [
    "Event",
    "PointPlaced",
    "ProfilePointPlaced",
    "AxisPointPlaced",
    "LastPointRemoved",
    "CurveCleared",
    "RebuildRequested",
    "ModeToggled",
    "ViewToggled",
    "MeshRebuilt",
    "RebuildFailed",
    "EventDispatcher",
    "Subscription",
]
