from aiohttp.test_utils import TestClient

from cyclebook.models import Role
from cyclebook.serializer import JSendSchema, JSendStatus, Many
from cyclebook.serializer.models import RideHistorySchema


class TestRideHistoryView:

    async def test_get_ride_history(self, client: TestClient, booking_manager, random_rider, rider_headers, clock):
        """Assert that a rider sees each of their completed rides once, oldest first."""
        rides = []
        for minutes, place in ((10, "Library"), (40, "Canteen")):
            booking = await booking_manager.create(random_rider, place, "Cycle 1")
            await booking_manager.start(booking.id, booking.verification_code)
            clock.advance(minutes=minutes)
            rides.append(await booking_manager.stop(booking.id, "Gate1"))

        response_schema = JSendSchema.of(rides=Many(RideHistorySchema()))
        response = await client.get('/api/ride-history', headers=rider_headers)
        response_data = response_schema.load(await response.json())

        assert response.status == 200
        assert response_data["status"] == JSendStatus.SUCCESS
        history = response_data["data"]["rides"]
        assert [ride["booking_id"] for ride in history] == [ride.id for ride in rides]
        assert [ride["cost"] for ride in history] == [10, 59]

    async def test_only_own_rides(self, client: TestClient, booking_manager, random_account_factory,
                                  rider_headers, clock):
        other = await random_account_factory(Role.RIDER)
        booking = await booking_manager.create(other, "Library", "Cycle 1")
        await booking_manager.start(booking.id, booking.verification_code)
        await booking_manager.stop(booking.id, "Gate1")

        response = await client.get('/api/ride-history', headers=rider_headers)
        response_data = JSendSchema.of(rides=Many(RideHistorySchema())).load(await response.json())
        assert response_data["data"]["rides"] == []

    async def test_unfinished_rides_not_listed(self, client: TestClient, rider_headers, started_booking):
        response = await client.get('/api/ride-history', headers=rider_headers)
        response_data = JSendSchema.of(rides=Many(RideHistorySchema())).load(await response.json())
        assert response_data["data"]["rides"] == []

    async def test_ride_history_as_host(self, client: TestClient, host_headers):
        response = await client.get('/api/ride-history', headers=host_headers)
        assert response.status == 403
