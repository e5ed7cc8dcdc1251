from inspect import signature, Parameter
from types import FunctionType
from typing import Callable, List


class EventListMeta(type):

    def __contains__(self, event: Callable):
        """Checks if the event (by name) exists on the events list."""
        event_name = event.__name__
        try:
            return event is getattr(self, event_name)
        except AttributeError:
            return False

    def events(self) -> List[Callable]:
        """Lists the events declared on the event list."""
        return [
            getattr(self, name) for name, value in vars(self).items()
            if not name.startswith("_") and isinstance(value, (staticmethod, FunctionType))
        ]


class EventList(metaclass=EventListMeta):
    """
    Contains a list of emittable events.
    Events are defined as functions on a subclass
    of the EventList type, and their signatures
    used to determine the "contract" of the event.
    """


def event_parameters(event: Callable) -> List[Parameter]:
    """Gets the parameters of an event, skipping ``self`` for events declared as plain methods."""
    parameters = list(signature(event).parameters.values())
    if parameters and parameters[0].name == "self":
        parameters = parameters[1:]
    return parameters
