from aiohttp.test_utils import TestClient
from marshmallow.fields import String, Integer

from cyclebook.models import Booking, RideHistoryEntry
from cyclebook.serializer import JSendSchema, JSendStatus, Many
from cyclebook.serializer.models import BookingSchema, CycleAvailabilitySchema, RideHistorySchema


class TestCycleAvailabilityView:

    async def test_get_availability(self, client: TestClient, started_booking):
        """Assert that only the cycle with an active ride is unavailable."""
        response_schema = JSendSchema.of(cycles=Many(CycleAvailabilitySchema()))
        response = await client.get('/api/cycle-availability', params={"place": started_booking.place})
        response_data = response_schema.load(await response.json())

        assert response.status == 200
        assert response_data["data"]["cycles"] == [
            {"cycle": "Cycle 1", "available": False},
            {"cycle": "Cycle 2", "available": True},
            {"cycle": "Cycle 3", "available": True},
        ]

    async def test_other_place_available(self, client: TestClient, started_booking):
        response_schema = JSendSchema.of(cycles=Many(CycleAvailabilitySchema()))
        response = await client.get('/api/cycle-availability', params={"place": "Nowhere"})
        response_data = response_schema.load(await response.json())
        assert all(cycle["available"] for cycle in response_data["data"]["cycles"])


class TestBookView:

    async def test_book(self, client: TestClient, random_rider, rider_headers):
        response_schema = JSendSchema.of(booking=BookingSchema(), verification_code=String())
        response = await client.post(
            '/api/book', json={"place": "Library", "cycle": "Cycle 2"}, headers=rider_headers
        )
        response_data = response_schema.load(await response.json())

        assert response.status == 201
        assert response_data["status"] == JSendStatus.SUCCESS
        booking = response_data["data"]["booking"]
        assert booking["account_id"] == random_rider.id
        assert (booking["place"], booking["cycle"]) == ("Library", "Cycle 2")
        assert not booking["started"]
        assert response_data["data"]["verification_code"] == booking["verification_code"]

    async def test_book_as_host(self, client: TestClient, host_headers):
        """Assert that hosts cannot book cycles."""
        response = await client.post('/api/book', json={"place": "Library", "cycle": "Cycle 2"}, headers=host_headers)
        response_data = JSendSchema().load(await response.json())

        assert response.status == 403
        assert response_data["status"] == JSendStatus.FAIL
        assert await Booking.all().count() == 0

    async def test_book_without_token(self, client: TestClient):
        response = await client.post('/api/book', json={"place": "Library", "cycle": "Cycle 2"})
        assert response.status == 401

    async def test_book_cycle_in_use(self, client: TestClient, rider_headers, started_booking):
        response = await client.post(
            '/api/book', json={"place": started_booking.place, "cycle": started_booking.cycle}, headers=rider_headers
        )
        response_data = JSendSchema().load(await response.json())

        assert response.status == 400
        assert "in use" in response_data["data"]["message"]

    async def test_book_unknown_cycle(self, client: TestClient, rider_headers):
        response = await client.post('/api/book', json={"place": "Library", "cycle": "Tandem"}, headers=rider_headers)
        assert response.status == 400

    async def test_book_missing_place(self, client: TestClient, rider_headers):
        response = await client.post('/api/book', json={"cycle": "Cycle 1"}, headers=rider_headers)
        response_data = JSendSchema().load(await response.json())
        assert response.status == 400
        assert "place" in response_data["data"]["errors"]


class TestBookingsView:

    async def test_get_bookings(self, client: TestClient, host_headers, random_rider, random_booking):
        response_schema = JSendSchema.of(bookings=Many(BookingSchema()))
        response = await client.get('/api/bookings', headers=host_headers)
        response_data = response_schema.load(await response.json())

        assert response.status == 200
        bookings = response_data["data"]["bookings"]
        assert [booking["id"] for booking in bookings] == [random_booking.id]
        assert bookings[0]["owner_email"] == random_rider.email
        assert "verification_code" not in bookings[0]

    async def test_get_bookings_as_rider(self, client: TestClient, rider_headers):
        """Assert that riders cannot see the other bookings."""
        response = await client.get('/api/bookings', headers=rider_headers)
        assert response.status == 403


class TestStartRideView:

    async def test_start_ride(self, client: TestClient, host_headers, random_booking):
        response_schema = JSendSchema.of(message=String(), booking=BookingSchema())
        response = await client.post('/api/start-ride', headers=host_headers, json={
            "booking_id": random_booking.id, "code": random_booking.verification_code
        })
        response_data = response_schema.load(await response.json())

        assert response.status == 200
        assert response_data["data"]["booking"]["started"]
        assert "start_time" in response_data["data"]["booking"]
        assert (await Booking.get(id=random_booking.id)).started

    async def test_start_ride_wrong_code(self, client: TestClient, host_headers, random_booking):
        wrong_code = "A" * 6 if random_booking.verification_code != "A" * 6 else "B" * 6
        response = await client.post('/api/start-ride', headers=host_headers, json={
            "booking_id": random_booking.id, "code": wrong_code
        })
        response_data = JSendSchema().load(await response.json())

        assert response.status == 400
        assert response_data["data"]["message"] == "Invalid booking or code."
        assert not (await Booking.get(id=random_booking.id)).started

    async def test_start_ride_twice(self, client: TestClient, host_headers, started_booking):
        response = await client.post('/api/start-ride', headers=host_headers, json={
            "booking_id": started_booking.id, "code": started_booking.verification_code
        })
        response_data = JSendSchema().load(await response.json())
        assert response.status == 400
        assert response_data["data"]["message"] == "Ride already started."

    async def test_start_missing_booking(self, client: TestClient, host_headers):
        response = await client.post('/api/start-ride', headers=host_headers, json={
            "booking_id": 1234, "code": "ABCDEF"
        })
        assert response.status == 404

    async def test_start_ride_as_rider(self, client: TestClient, rider_headers, random_booking):
        """Assert that riders cannot start their own rides."""
        response = await client.post('/api/start-ride', headers=rider_headers, json={
            "booking_id": random_booking.id, "code": random_booking.verification_code
        })
        assert response.status == 403
        assert not (await Booking.get(id=random_booking.id)).started


class TestStopRideView:

    async def test_stop_ride(self, client: TestClient, host_headers, started_booking, clock):
        clock.advance(minutes=31)
        response_schema = JSendSchema.of(duration=Integer(), cost=Integer())
        response = await client.post('/api/stop-ride', headers=host_headers, json={
            "booking_id": started_booking.id, "drop_location": "Main Gate"
        })
        response_data = response_schema.load(await response.json())

        assert response.status == 200
        assert response_data["data"] == {"duration": 31, "cost": 59}
        assert await RideHistoryEntry.all().count() == 1

    async def test_stop_ride_not_started(self, client: TestClient, host_headers, random_booking):
        response = await client.post('/api/stop-ride', headers=host_headers, json={
            "booking_id": random_booking.id, "drop_location": "Main Gate"
        })
        response_data = JSendSchema().load(await response.json())
        assert response.status == 400
        assert response_data["data"]["message"] == "Invalid or not started booking."

    async def test_stop_ride_missing_location(self, client: TestClient, host_headers, started_booking):
        response = await client.post('/api/stop-ride', headers=host_headers, json={
            "booking_id": started_booking.id
        })
        assert response.status == 400
        assert not (await Booking.get(id=started_booking.id)).stopped

    async def test_stop_ride_as_rider(self, client: TestClient, rider_headers, started_booking):
        response = await client.post('/api/stop-ride', headers=rider_headers, json={
            "booking_id": started_booking.id, "drop_location": "Main Gate"
        })
        assert response.status == 403


async def test_ride_scenario(client: TestClient, clock):
    """A rider books a cycle, a host starts the ride, and stops it twenty minutes later."""
    login_schema = JSendSchema.of(token=String(), role=String())

    rider = login_schema.load(await (await client.post('/api/register-or-login', json={
        "email": "123456789@sastra.ac.in", "password": "r1-password", "role": "rider"
    })).json())["data"]
    host = login_schema.load(await (await client.post('/api/register-or-login', json={
        "email": "987654321@sastra.ac.in", "password": "h1-password", "role": "host"
    })).json())["data"]
    rider_headers = {"Authorization": f"Bearer {rider['token']}"}
    host_headers = {"Authorization": f"Bearer {host['token']}"}

    booked = JSendSchema.of(booking=BookingSchema(), verification_code=String()).load(await (await client.post(
        '/api/book', json={"place": "Lib", "cycle": "Cycle 1"}, headers=rider_headers
    )).json())["data"]

    response = await client.post('/api/start-ride', headers=host_headers, json={
        "booking_id": booked["booking"]["id"], "code": booked["verification_code"]
    })
    assert response.status == 200

    clock.advance(minutes=20)
    stopped = JSendSchema.of(duration=Integer(), cost=Integer()).load(await (await client.post(
        '/api/stop-ride', headers=host_headers, json={"booking_id": booked["booking"]["id"], "drop_location": "Gate2"}
    )).json())["data"]
    assert stopped == {"duration": 20, "cost": 20}

    history = JSendSchema.of(rides=Many(RideHistorySchema())).load(await (await client.get(
        '/api/ride-history', headers=rider_headers
    )).json())["data"]["rides"]
    assert len(history) == 1
    assert (history[0]["duration"], history[0]["cost"], history[0]["drop_location"]) == (20, 20, "Gate2")
    assert history[0]["booking_id"] == booked["booking"]["id"]
