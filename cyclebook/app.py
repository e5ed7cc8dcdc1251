"""
App
-----
"""

from datetime import timedelta

import sentry_sdk
from aiohttp import web
from aiohttp_apispec import setup_aiohttp_apispec
from nacl.encoding import HexEncoder
from nacl.utils import random
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from cyclebook import logger
from cyclebook.config import api_root, server_mode, database_url, secret_key as configured_secret_key, \
    token_lifetime, cycles, sentry_dsn
from cyclebook.middleware import error_middleware
from cyclebook.service.manager.booking_manager import BookingManager
from cyclebook.service.manager.notification_bus import NotificationBus
from cyclebook.service.tokens import TokenManager
from cyclebook.signals import register_signals
from cyclebook.version import __version__, name
from cyclebook.views import register_views


def get_secret_key(secret_key=None) -> str:
    """
    Picks the key to sign session tokens with.

    :raises RuntimeError: If no key is configured outside of development.
    """
    if secret_key is not None:
        return secret_key
    if configured_secret_key:
        return configured_secret_key
    if server_mode == "development":
        logger.warning("No SECRET_KEY set, using a random key. Sessions will not survive a restart.")
        return HexEncoder.encode(random(32)).decode()
    raise RuntimeError("The SECRET_KEY environment variable must be set outside of development.")


def build_app(db_uri=None, secret_key=None):
    """Sets up the app."""
    app = web.Application(middlewares=[error_middleware])

    app['booking_manager'] = BookingManager(cycles)
    app['notification_bus'] = NotificationBus()
    app['notification_bus'].attach(app['booking_manager'].hub)
    app['token_manager'] = TokenManager(get_secret_key(secret_key), timedelta(seconds=token_lifetime))
    app['database_uri'] = db_uri if db_uri is not None else database_url

    # set up the database and background tasks
    register_signals(app)

    # register views
    register_views(app, api_root)

    setup_aiohttp_apispec(
        app=app, title=name, version=__version__, url=f"{api_root}/docs",
        components={
            "securitySchemes": {
                "SessionToken": {
                    "type": "http",
                    "description": "A session token from the register-or-login route",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                }
            }
        },
    )

    # set up sentry exception tracking
    if server_mode != "development" and sentry_dsn:
        logger.info("Starting Sentry Logging")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=server_mode,
            release=f"{name}@{__version__}",
            integrations=[AioHttpIntegration()]
        )

    return app
