"""
The pricing module determines the cost of a ride from the time it took.

Rides are charged a flat rate for the first half hour, after which each
started half hour is charged at the overage rate.
"""

from datetime import datetime
from math import ceil

SHORT_RIDE_MINUTES = 15
SHORT_RIDE_PRICE = 10

BASE_RIDE_MINUTES = 30
BASE_RIDE_PRICE = 20

OVERAGE_BLOCK_MINUTES = 30
OVERAGE_BLOCK_PRICE = 39


def get_price(minutes: int) -> int:
    """
    Given the length of a ride, returns its cost.

    Tier boundaries are inclusive, so a ride of exactly 15 minutes is a short ride.

    :raises ValueError: If the duration is negative.
    """
    if minutes < 0:
        raise ValueError(f"A ride cannot last {minutes} minutes.")

    if minutes <= SHORT_RIDE_MINUTES:
        return SHORT_RIDE_PRICE

    if minutes <= BASE_RIDE_MINUTES:
        return BASE_RIDE_PRICE

    overage_blocks = ceil((minutes - BASE_RIDE_MINUTES) / OVERAGE_BLOCK_MINUTES)
    return BASE_RIDE_PRICE + overage_blocks * OVERAGE_BLOCK_PRICE


def get_duration(start_time: datetime, end_time: datetime) -> int:
    """The whole number of minutes between the start and end of a ride."""
    return int((end_time - start_time).total_seconds() // 60)
