"""
Base
------------------------

The base view for the API. This view contains functionality
required in all other views.
"""

from typing import Optional

from aiohttp.abc import Application
from aiohttp.web import View, AbstractRoute
from aiohttp_cors import CorsConfig, CorsViewMixin, ResourceOptions

from cyclebook.service.manager.booking_manager import BookingManager
from cyclebook.service.manager.notification_bus import NotificationBus
from cyclebook.service.tokens import TokenManager


class ViewConfigurationError(Exception):
    """
    Raised if the view doesn't provide a URL.
    """


class BaseView(View, CorsViewMixin):
    """
    The base view that all other views extend. Gives the views
    access to the managers stored on the app.
    """

    url: str
    name: Optional[str]
    route: AbstractRoute
    booking_manager: BookingManager
    notification_bus: NotificationBus
    token_manager: TokenManager

    cors_config = {
        "*": ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    }

    @classmethod
    def register_route(cls, app: Application, base: Optional[str] = None):
        """
        Registers the view with the given router.

        :raises ViewConfigurationError: If the URL hasn't been set on the given view.
        """
        try:
            url = base + cls.url if base is not None else cls.url
        except AttributeError:
            raise ViewConfigurationError("No URL provided!")

        kwargs = {}
        name = getattr(cls, "name", None)
        if name is not None:
            kwargs["name"] = name

        cls.route = app.router.add_view(url, cls, **kwargs)
        cls.booking_manager = app["booking_manager"]
        cls.notification_bus = app["notification_bus"]
        cls.token_manager = app["token_manager"]

    @classmethod
    def enable_cors(cls, cors: CorsConfig):
        """Enables CORS on the view."""
        try:
            cors.add(cls.route, webview=True)
        except AttributeError as error:
            raise ViewConfigurationError("No route assigned. Please register the route first.") from error
