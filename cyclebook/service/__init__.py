"""
.. autoclasstree:: cyclebook.service

The service layer for the system. Acts as the internal API.
Each interface (REST API, web-sockets) should use the
service layer to implement their logic.

The service layer implements the use cases for the system, such
that they may be reused by any program that needs to access it.
It is designed to represent the business logic.
"""

from .errors import ServiceError, InvalidRequestError, AuthenticationError, AuthorizationError, NotFoundError, \
    ConflictError
from .manager.booking_manager import BookingManager, BookingEvent, CycleInUseError, RideAlreadyStartedError, \
    InvalidCodeError, RideNotStartedError, RideAlreadyStoppedError, UnknownCycleError
from .manager.notification_bus import NotificationBus, Topic
from .tokens import TokenManager, TokenVerificationError, MissingTokenError, Session
