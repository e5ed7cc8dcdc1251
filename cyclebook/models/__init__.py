"""
The models package contains all the models used on the server.

.. autoclasstree:: cyclebook.models
"""

from .account import Account, Role
from .booking import Booking
from .ride import RideHistoryEntry
