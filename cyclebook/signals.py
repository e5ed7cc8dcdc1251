"""
Signals
-------

Defines a number of signals that the aiohttp server uses
to manage the database and the background tasks.

Each signal must accept an the ``app`` argument.
"""
import asyncio
from asyncio import CancelledError
from contextlib import suppress
from datetime import timedelta

from aiohttp.abc import Application
from tortoise import Tortoise, connections

from cyclebook import logger
from cyclebook.config import tortoise_modules


async def close_event_connections(app: Application):
    """Closes all the open event sockets."""
    await app['notification_bus'].close_connections()


async def close_database_connections(app: Application):
    """Closes the open database connections."""
    await connections.close_all()


async def initialize_database(app: Application):
    """Initializes and generates the schema for our database."""
    logger.info("Connecting to %s", app['database_uri'].split("://")[0])
    await Tortoise.init(db_url=app['database_uri'], modules=tortoise_modules, use_tz=True)
    await Tortoise.generate_schemas(safe=True)


async def start_background_tasks(app: Application):
    """Starts the background tasks."""
    logger.info("Starting Background Tasks")
    loop = asyncio.get_event_loop()
    app['token_cleaner'] = loop.create_task(app['token_manager'].remove_all_expired(timedelta(hours=1)))
    app['event_relay'] = loop.create_task(app['notification_bus'].relay())


async def stop_background_tasks(app):
    """
    Stops the background tasks.

    .. note: We suppress CancelledError so that coroutines that do not handle it don't cause issues.
    """
    for task in (app['token_cleaner'], app['event_relay']):
        task.cancel()
        with suppress(CancelledError):
            await task


def register_signals(app, init_database=True):
    """Registers all the signals at the appropriate hooks."""
    if init_database:
        app.on_startup.append(initialize_database)

    app.on_startup.append(start_background_tasks)

    app.on_shutdown.append(close_event_connections)

    app.on_cleanup.append(stop_background_tasks)
    if init_database:
        app.on_cleanup.append(close_database_connections)
