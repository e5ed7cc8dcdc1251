import os
from datetime import timedelta

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient
from tortoise import Tortoise, connections

from cyclebook.config import tortoise_modules
from cyclebook.middleware import error_middleware
from cyclebook.models import Account, Role
from cyclebook.service.manager.booking_manager import BookingManager
from cyclebook.service.manager.notification_bus import NotificationBus
from cyclebook.service.passwords import hash_password
from cyclebook.service.tokens import TokenManager
from cyclebook.signals import register_signals
from cyclebook.views import register_views
from tests.util import FakeClock, fake, random_email

CYCLES = ("Cycle 1", "Cycle 2", "Cycle 3")


@pytest.fixture(scope="session")
def database_url():
    return os.getenv("DATABASE_URL", "sqlite://:memory:")


@pytest.fixture
async def database(database_url):
    await Tortoise.init(db_url=database_url, modules=tortoise_modules, use_tz=True)
    await Tortoise.generate_schemas(safe=True)
    yield
    await connections.close_all()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def booking_manager(database, clock):
    return BookingManager(CYCLES, clock=clock)


@pytest.fixture
def notification_bus(booking_manager):
    bus = NotificationBus()
    bus.attach(booking_manager.hub)
    return bus


@pytest.fixture
def token_manager():
    return TokenManager(fake.sha256(), timedelta(hours=1))


@pytest.fixture
async def client(aiohttp_client, database, booking_manager, notification_bus, token_manager) -> TestClient:
    app = web.Application(middlewares=[error_middleware])

    app['booking_manager'] = booking_manager
    app['notification_bus'] = notification_bus
    app['token_manager'] = token_manager

    register_signals(app, init_database=False)  # we get the database from a fixture
    register_views(app, "/api")

    return await aiohttp_client(app)


@pytest.fixture
def random_account_factory(database):

    async def create_account(role=Role.RIDER, password=None):
        return await Account.create(
            email=random_email(), password_hash=hash_password(password or fake.password()), role=role
        )

    return create_account


@pytest.fixture
async def random_rider(random_account_factory) -> Account:
    """Creates a random rider in the database."""
    return await random_account_factory(Role.RIDER)


@pytest.fixture
async def random_host(random_account_factory) -> Account:
    """Creates a random host in the database."""
    return await random_account_factory(Role.HOST)


@pytest.fixture
def rider_headers(random_rider, token_manager):
    return {"Authorization": f"Bearer {token_manager.issue_token(random_rider)}"}


@pytest.fixture
def host_headers(random_host, token_manager):
    return {"Authorization": f"Bearer {token_manager.issue_token(random_host)}"}


@pytest.fixture
async def random_booking(booking_manager, random_rider):
    """Books the first cycle at a random place for the random rider."""
    return await booking_manager.create(random_rider, fake.city(), CYCLES[0])


@pytest.fixture
async def started_booking(booking_manager, random_booking):
    return await booking_manager.start(random_booking.id, random_booking.verification_code)
