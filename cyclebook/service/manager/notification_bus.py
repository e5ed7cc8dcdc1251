"""
Notification Bus
----------------

Relays the booking events to every observer connected on the event socket.

Responsibilities
================

- track the open observer sockets
- remember which topics and rides each observer is interested in
- broadcast events in the order they happened, dropping sockets that have gone away

Broadcasting only queues the event. The :meth:`NotificationBus.relay` task
publishes the queue one event at a time, so every observer receives the
events in the order the booking manager emitted them. An observer that is
disconnected simply misses the event.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set

from aiohttp import WSCloseCode
from aiohttp.web_ws import WebSocketResponse

from cyclebook import logger
from cyclebook.events import EventHub
from cyclebook.models import Booking
from cyclebook.serializer.models import BookingSchema, RideStartedSchema, RideStoppedSchema, CycleStatusSchema
from cyclebook.service.manager.booking_manager import BookingEvent


class Topic(str, Enum):
    NEW_BOOKING = "newBooking"
    RIDE_STARTED = "rideStarted"
    RIDE_STOPPED = "rideStopped"
    CYCLE_STATUS_UPDATE = "cycleStatusUpdate"


booking_schema = BookingSchema(exclude=("verification_code", "owner_email"))
ride_started_schema = RideStartedSchema()
ride_stopped_schema = RideStoppedSchema()
cycle_status_schema = CycleStatusSchema()


@dataclass
class Subscriber:
    socket: WebSocketResponse
    topics: Optional[Set[Topic]] = None
    """The topics to send, or None for all of them."""

    rides: Set[int] = field(default_factory=set)
    """The bookings this subscriber has joined."""

    def wants(self, topic: Topic, ride: Optional[int] = None) -> bool:
        if self.topics is not None and topic not in self.topics:
            return False
        return ride is None or ride in self.rides


class NotificationBus:
    """
    Maintains the connected observers and broadcasts events to them.
    """

    def __init__(self):
        self._subscribers: Dict[int, Subscriber] = {}
        self._queue = asyncio.Queue()
        """The (topic, payload, ride) events waiting to be published."""

    def __len__(self):
        return len(self._subscribers)

    def attach(self, hub: EventHub):
        """Relays the events of a booking manager's hub to the observers."""
        hub.subscribe(BookingEvent.new_booking, self._new_booking)
        hub.subscribe(BookingEvent.ride_started, self._ride_started)
        hub.subscribe(BookingEvent.ride_stopped, self._ride_stopped)
        hub.subscribe(BookingEvent.cycle_status_changed, self._cycle_status_changed)

    def add(self, socket: WebSocketResponse) -> Subscriber:
        if socket.closed:
            raise ConnectionError("New socket is closed.")

        subscriber = Subscriber(socket)
        self._subscribers[id(socket)] = subscriber
        return subscriber

    def remove(self, socket: WebSocketResponse):
        self._subscribers.pop(id(socket), None)

    def subscribe(self, socket: WebSocketResponse, topics: Iterable[str]):
        """
        Limits the topics sent to a socket. An empty list sends everything again.

        :raises ValueError: If any of the topics do not exist.
        """
        topics = {Topic(topic) for topic in topics}
        self._subscribers[id(socket)].topics = topics or None

    def join_ride(self, socket: WebSocketResponse, booking_id: int):
        self._subscribers[id(socket)].rides.add(booking_id)

    def leave_ride(self, socket: WebSocketResponse, booking_id: int):
        self._subscribers[id(socket)].rides.discard(booking_id)

    def ride_members(self, booking_id: int) -> List[WebSocketResponse]:
        """Gets the sockets that have joined the given ride."""
        return [s.socket for s in self._subscribers.values() if booking_id in s.rides]

    async def publish(self, topic: Topic, payload: Dict[str, Any], *, ride: Optional[int] = None) -> int:
        """
        Sends an event to every interested observer, returning how many received it.

        :param ride: If given, only observers that joined this ride receive the event.
        """
        message = {"event": topic.value, "data": payload}
        delivered = 0

        for subscriber in list(self._subscribers.values()):
            if not subscriber.wants(topic, ride):
                continue

            if subscriber.socket.closed:
                self.remove(subscriber.socket)
                continue

            try:
                await subscriber.socket.send_json(message)
            except (ConnectionError, RuntimeError) as error:
                logger.debug("Dropping observer after failed send: %s", error)
                self.remove(subscriber.socket)
            else:
                delivered += 1

        return delivered

    def broadcast(self, topic: Topic, payload: Dict[str, Any], *, ride: Optional[int] = None):
        """Queues an event to be published by the relay without waiting for it."""
        self._queue.put_nowait((topic, payload, ride))

    async def relay(self):
        """Publishes the queued events one at a time, in the order they were broadcast."""
        while True:
            topic, payload, ride = await self._queue.get()
            try:
                await self.publish(topic, payload, ride=ride)
            finally:
                self._queue.task_done()

    async def join(self):
        """Waits until every queued event has been published."""
        await self._queue.join()

    async def close_connections(self):
        if self._subscribers:
            logger.info("Closing all open event sockets")
        for subscriber in list(self._subscribers.values()):
            await subscriber.socket.close(code=WSCloseCode.GOING_AWAY)
        self._subscribers = {}

    def _new_booking(self, booking: Booking):
        self.broadcast(Topic.NEW_BOOKING, booking_schema.dump(booking.serialize()))

    def _ride_started(self, booking: Booking):
        self.broadcast(Topic.RIDE_STARTED, ride_started_schema.dump({
            "booking_id": booking.id,
            "start_time": booking.start_time
        }))

    def _ride_stopped(self, booking: Booking):
        self.broadcast(Topic.RIDE_STOPPED, ride_stopped_schema.dump({
            "booking_id": booking.id,
            "duration": booking.duration,
            "cost": booking.cost,
            "drop_location": booking.drop_location
        }))

    def _cycle_status_changed(self, place: str, cycle: str, available: bool):
        self.broadcast(Topic.CYCLE_STATUS_UPDATE, cycle_status_schema.dump({
            "place": place, "cycle": cycle, "available": available
        }))
