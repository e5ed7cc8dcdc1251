from aiohttp import web

from cyclebook.middleware import error_middleware
from cyclebook.serializer import JSendSchema, JSendStatus
from cyclebook.service.errors import NotFoundError, ConflictError


async def not_found(request):
    raise NotFoundError("Booking not found.", booking_id=3)


async def conflict(request):
    raise ConflictError("Cycle Cycle 1 at Library is currently in use.")


async def broken(request):
    raise RuntimeError("secret internals")


async def missing(request):
    raise web.HTTPNotFound()


async def error_client(aiohttp_client):
    app = web.Application(middlewares=[error_middleware])
    app.router.add_get("/not-found", not_found)
    app.router.add_get("/conflict", conflict)
    app.router.add_get("/broken", broken)
    app.router.add_get("/missing", missing)
    return await aiohttp_client(app)


async def test_service_error(aiohttp_client):
    """Assert that service errors are reported with their status and data."""
    client = await error_client(aiohttp_client)
    response = await client.get("/not-found")
    response_data = JSendSchema().load(await response.json())

    assert response.status == 404
    assert response_data["status"] == JSendStatus.FAIL
    assert response_data["data"] == {"message": "Booking not found.", "booking_id": 3}


async def test_conflict_is_bad_request(aiohttp_client):
    client = await error_client(aiohttp_client)
    response = await client.get("/conflict")
    assert response.status == 400


async def test_unexpected_error(aiohttp_client):
    """Assert that unexpected errors are hidden behind a generic message."""
    client = await error_client(aiohttp_client)
    response = await client.get("/broken")
    response_data = JSendSchema().load(await response.json())

    assert response.status == 500
    assert response_data["status"] == JSendStatus.ERROR
    assert "secret" not in response_data["message"]


async def test_http_exceptions_pass_through(aiohttp_client):
    client = await error_client(aiohttp_client)
    response = await client.get("/missing")
    assert response.status == 404
