"""
.. autoclasstree:: cyclebook.events

This module provides a simple event system. It is centered around the use of hubs.
A hub is created by passing a number of event lists in. These event lists provide
typed callback signatures which subscribers can use to implement their handlers.

>>> class RideEvents(EventList):
>>>     @staticmethod
>>>     def ride_started(booking_id: int):
>>>         "A ride has started."
>>>
>>> def ride_handler(booking_id):
>>>     print(f"Started: {booking_id}")
>>>
>>> hub = EventHub(RideEvents)
>>> hub.subscribe(RideEvents.ride_started, ride_handler)
>>> hub.emit(RideEvents.ride_started, 12)
Started: 12
"""

from .event_hub import EventHub, BoundEvent
from .event_list import EventList
from .exceptions import NoSuchEventError, NoSuchListenerError, InvalidHandlerError
