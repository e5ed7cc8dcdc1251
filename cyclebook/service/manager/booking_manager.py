"""
Booking Manager
---------------

This module is what handles all the bookings in the system.

Responsibilities
================

This object handles everything needed to take a cycle out and bring it back.

- creating a booking
- starting a ride once the host has checked the verification code
- stopping a ride, pricing it, and archiving it to the rider's history

Every transition that can change whether a cycle is in use runs under a lock
for that (place, cycle) pair, and the start and stop writes are conditional
updates, so a cycle has at most one active ride and a ride is only started
and stopped once. The manager publishes events on its hub so that other
modules (such as the :class:`~cyclebook.service.manager.notification_bus.NotificationBus`)
can stay up to date.
"""
import asyncio
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, Sequence, Tuple

from tortoise.transactions import in_transaction

from cyclebook import logger
from cyclebook.config import cycles as configured_cycles
from cyclebook.events import EventHub, EventList
from cyclebook.models import Account, Booking, RideHistoryEntry
from cyclebook.pricing import get_price, get_duration
from cyclebook.service.access.bookings import get_booking, is_in_use
from cyclebook.service.codes import generate_code
from cyclebook.service.errors import ConflictError, InvalidRequestError, NotFoundError


class UnknownCycleError(InvalidRequestError):
    """Raised when booking a cycle that does not exist."""


class CycleInUseError(ConflictError):
    """Raised when the requested cycle already has an active ride."""


class RideAlreadyStartedError(ConflictError):
    pass


class InvalidCodeError(InvalidRequestError):
    """Raised when the verification code does not match the booking."""


class RideNotStartedError(InvalidRequestError):
    pass


class RideAlreadyStoppedError(InvalidRequestError):
    pass


class BookingEvent(EventList):

    def new_booking(self, booking: Booking):
        """A cycle was booked."""

    def ride_started(self, booking: Booking):
        """A host confirmed the code and the ride began."""

    def ride_stopped(self, booking: Booking):
        """A ride was ended and priced."""

    def cycle_status_changed(self, place: str, cycle: str, available: bool):
        """A cycle became available or unavailable."""


class BookingManager:
    """
    Handles the lifecycle of the booking in the system.
    """

    def __init__(self, cycles: Sequence[str] = configured_cycles, clock: Callable[[], datetime] = None):
        self.cycles = tuple(cycles)
        self._now = clock if clock is not None else lambda: datetime.now(timezone.utc)
        self._locks: Dict[Tuple[str, str], asyncio.Lock] = defaultdict(asyncio.Lock)
        """Serializes the transitions on each (place, cycle) pair."""

        self.hub = EventHub(BookingEvent)

    async def create(self, account: Account, place: str, cycle: str) -> Booking:
        """
        Books a cycle at a place for an account.

        :raises UnknownCycleError: If the cycle is not one of the known cycles.
        :raises CycleInUseError: If the cycle has an active ride.
        """
        if cycle not in self.cycles:
            raise UnknownCycleError(f"{cycle} is not a cycle. Choose one of {', '.join(self.cycles)}.", cycle=cycle)

        async with self._locks[(place, cycle)]:
            if await is_in_use(place, cycle):
                raise CycleInUseError(f"Cycle {cycle} at {place} is currently in use.", place=place, cycle=cycle)

            booking = await Booking.create(
                account=account, place=place, cycle=cycle, verification_code=generate_code()
            )

        logger.info("Account %s booked %s", account.id, booking)
        self.hub.emit(BookingEvent.new_booking, booking)
        return booking

    async def start(self, booking_id: int, code: str) -> Booking:
        """
        Starts the ride for a booking.

        :raises NotFoundError: If there is no such booking.
        :raises InvalidCodeError: If the code does not match.
        :raises RideAlreadyStartedError: If the ride was started before.
        :raises CycleInUseError: If another ride on the same cycle is active.
        """
        booking = await self._get_booking(booking_id)

        if code != booking.verification_code:
            raise InvalidCodeError("Invalid booking or code.", booking_id=booking_id)

        if booking.started:
            raise RideAlreadyStartedError("Ride already started.", booking_id=booking_id)

        async with self._locks[(booking.place, booking.cycle)]:
            if await is_in_use(booking.place, booking.cycle, excluding=booking):
                raise CycleInUseError(
                    f"Cycle {booking.cycle} at {booking.place} is currently in use.",
                    place=booking.place, cycle=booking.cycle
                )

            start_time = self._now()
            updated = await Booking.filter(id=booking.id, started=False).update(started=True, start_time=start_time)
            if not updated:
                raise RideAlreadyStartedError("Ride already started.", booking_id=booking_id)

        booking.started = True
        booking.start_time = start_time

        logger.info("Started ride for %s", booking)
        self.hub.emit(BookingEvent.ride_started, booking)
        self.hub.emit(BookingEvent.cycle_status_changed, booking.place, booking.cycle, False)
        return booking

    async def stop(self, booking_id: int, drop_location: str) -> Booking:
        """
        Stops the ride for a booking, pricing it and adding it to the rider's history.

        The booking update and the history entry are written in one transaction.

        :raises NotFoundError: If there is no such booking.
        :raises RideNotStartedError: If the ride has not started.
        :raises RideAlreadyStoppedError: If the ride was already stopped.
        """
        booking = await self._get_booking(booking_id)

        if not booking.started:
            raise RideNotStartedError("Invalid or not started booking.", booking_id=booking_id)

        if booking.stopped:
            raise RideAlreadyStoppedError("Ride already stopped.", booking_id=booking_id)

        async with self._locks[(booking.place, booking.cycle)]:
            end_time = self._now()
            duration = get_duration(booking.start_time, end_time)
            cost = get_price(duration)

            async with in_transaction():
                updated = await Booking.filter(id=booking.id, started=True, stopped=False).update(
                    stopped=True, end_time=end_time, duration=duration, cost=cost, drop_location=drop_location
                )
                if not updated:
                    raise RideAlreadyStoppedError("Ride already stopped.", booking_id=booking_id)

                await RideHistoryEntry.create(
                    account_id=booking.account_id, booking_id=booking.id,
                    duration=duration, cost=cost, drop_location=drop_location
                )

        booking.stopped = True
        booking.end_time = end_time
        booking.duration = duration
        booking.cost = cost
        booking.drop_location = drop_location

        logger.info("Stopped ride for %s after %s minutes (cost %s)", booking, duration, cost)
        self.hub.emit(BookingEvent.ride_stopped, booking)
        self.hub.emit(BookingEvent.cycle_status_changed, booking.place, booking.cycle, True)
        return booking

    @staticmethod
    async def _get_booking(booking_id: int) -> Booking:
        booking = await get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found.", booking_id=booking_id)
        return booking
