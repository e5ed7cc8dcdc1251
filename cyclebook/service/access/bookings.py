"""
Bookings
--------
"""
from typing import Dict, List, Optional, Sequence, Union

from cyclebook.config import cycles as configured_cycles
from cyclebook.models import Account, Booking, RideHistoryEntry
from cyclebook.models.util import resolve_id


async def get_booking(booking_id: int) -> Optional[Booking]:
    return await Booking.filter(id=booking_id).first()


async def get_active_bookings() -> List[Booking]:
    """Gets all the bookings that have not been stopped, along with their owners."""
    return await Booking.filter(stopped=False).order_by("created_at").prefetch_related("account")


async def cycles_in_use(place: str) -> List[str]:
    """Gets the cycles at a place that currently have an active ride."""
    return await Booking.filter(place=place, started=True, stopped=False).values_list("cycle", flat=True)


async def is_in_use(place: str, cycle: str, *, excluding: Union[Booking, int] = None) -> bool:
    """Checks if the given cycle has an active ride, optionally ignoring one booking."""
    query = Booking.filter(place=place, cycle=cycle, started=True, stopped=False)
    if excluding is not None:
        query = query.exclude(id=resolve_id(excluding))
    return await query.exists()


async def get_availability(place: str, cycles: Sequence[str] = configured_cycles) -> List[Dict]:
    """
    Lists whether each cycle at the given place can be booked.

    A cycle is unavailable exactly when it has an active ride.
    """
    in_use = set(await cycles_in_use(place))
    return [{"cycle": cycle, "available": cycle not in in_use} for cycle in cycles]


async def get_ride_history(account: Union[Account, int]) -> List[RideHistoryEntry]:
    return await RideHistoryEntry.filter(account_id=resolve_id(account)).order_by("timestamp", "id")
