class EventError(Exception):
    pass


class NoSuchEventError(EventError, AttributeError):
    """Raised when an event is not registered on a hub."""


class NoSuchListenerError(EventError):
    """Raised when removing a handler that was never subscribed."""


class InvalidHandlerError(EventError, TypeError):
    """Raised when a handler cannot accept the arguments of the event it subscribes to."""
