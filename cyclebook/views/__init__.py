"""
.. autoclasstree:: cyclebook.views

This package contains the server API for booking cycles,
starting and stopping rides, and watching them happen.

API Conventions
---------------

All routes accept and return JSON with snake_case key naming. Routes that
need a session expect an ``Authorization: Bearer $TOKEN`` header, where the
token is the one returned from logging in.

API Expected Responses
----------------------

The server responds with JSend formatted JSON to all requests.
"""

import aiohttp_cors
from aiohttp.abc import Application

from cyclebook import logger
from .auth import RegisterOrLoginView, VerifyTokenView, LogoutView, ResetPasswordView
from .bookings import BookView, BookingsView, StartRideView, StopRideView
from .cycles import CycleAvailabilityView
from .events import EventSocketView
from .rides import RideHistoryView

views = [
    RegisterOrLoginView, VerifyTokenView, LogoutView, ResetPasswordView,
    CycleAvailabilityView,
    BookView, BookingsView, StartRideView, StopRideView,
    RideHistoryView,
    EventSocketView,
]


def register_views(app: Application, base: str):
    """
    Registers all the API views onto the given router at a specific root url.

    :param app: The app to register the views to.
    :param base: The base URL.
    """
    cors = aiohttp_cors.setup(app, defaults={
        "*": aiohttp_cors.ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    })

    for view in views:
        logger.info("Registered %s at %s", view.__name__, base + view.url)
        view.register_route(app, base)
        view.enable_cors(cors)
