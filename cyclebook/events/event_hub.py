"""
Event Hub
---------

A hub holds the listeners for the events of one or more
:class:`~cyclebook.events.event_list.EventList` types.
"""

from collections import defaultdict
from inspect import signature
from typing import Callable, Dict, List, Type, Union

from .event_list import EventList, event_parameters
from .exceptions import NoSuchEventError, NoSuchListenerError, InvalidHandlerError


class BoundEvent:
    """An event accessed through a hub, allowing ``hub.event += handler`` and ``hub.event(*args)``."""

    def __init__(self, hub: "EventHub", event: Callable):
        self.hub = hub
        self.event = event

    def __iadd__(self, handler: Callable):
        self.hub.subscribe(self.event, handler)
        return self

    def __isub__(self, handler: Callable):
        self.hub.unsubscribe(self.event, handler)
        return self

    def __call__(self, *args, **kwargs):
        self.hub.emit(self.event, *args, **kwargs)

    def __repr__(self):
        return f"<BoundEvent {self.event.__qualname__}>"


class EventHub:
    """
    Dispatches events to their subscribed handlers.

    Handlers are called synchronously, in subscription order, and any
    exception they raise propagates to the emitter.
    """

    def __init__(self, *event_lists: Type[EventList]):
        self._event_lists: List[Type[EventList]] = []
        self._events: Dict[str, Callable] = {}
        self._listeners: Dict[Callable, List[Callable]] = defaultdict(list)
        self.add_events(*event_lists)

    def add_events(self, *event_lists: Type[EventList]):
        """Registers the events of the given event lists on the hub."""
        for event_list in event_lists:
            self._event_lists.append(event_list)
            for event in event_list.events():
                self._events[event.__name__] = event

    def subscribe(self, event: Union[Callable, BoundEvent], handler: Callable):
        """
        Subscribes a handler to an event.

        :raises NoSuchEventError: If the event is not on this hub.
        :raises InvalidHandlerError: If the handler cannot accept the event's arguments.
        """
        event = self._resolve(event)
        self._validate_handler(event, handler)
        self._listeners[event].append(handler)

    def unsubscribe(self, event: Union[Callable, BoundEvent], handler: Callable):
        """
        Removes a handler from an event.

        :raises NoSuchListenerError: If the handler was not subscribed.
        """
        if isinstance(event, BoundEvent):
            event = event.event

        try:
            self._listeners[event].remove(handler)
        except ValueError as error:
            raise NoSuchListenerError(f"{handler} is not subscribed to {event.__name__}.") from error

    def emit(self, event: Union[Callable, BoundEvent], *args, **kwargs):
        """Calls every handler subscribed to the event with the given arguments."""
        event = self._resolve(event)
        for handler in list(self._listeners[event]):
            handler(*args, **kwargs)

    def _resolve(self, event: Union[Callable, BoundEvent]) -> Callable:
        if isinstance(event, BoundEvent):
            event = event.event
        if event not in self:
            raise NoSuchEventError(f"{getattr(event, '__name__', event)} is not an event on this hub.")
        return event

    @staticmethod
    def _validate_handler(event: Callable, handler: Callable):
        placeholders = [None] * len(event_parameters(event))
        try:
            signature(handler).bind(*placeholders)
        except TypeError as error:
            raise InvalidHandlerError(
                f"Handler {handler} does not match the signature of {event.__name__}."
            ) from error

    def __contains__(self, item):
        if isinstance(item, type) and issubclass(item, EventList):
            return item in self._event_lists
        return self._events.get(getattr(item, "__name__", None)) is item

    def __getattr__(self, name) -> BoundEvent:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return BoundEvent(self, self._events[name])
        except KeyError:
            raise NoSuchEventError(f"{name} is not an event on this hub.")

    def __setattr__(self, name, value):
        # in-place operators on a bound event re-assign it to the hub
        if isinstance(value, BoundEvent) and value.hub is self:
            return
        super().__setattr__(name, value)
