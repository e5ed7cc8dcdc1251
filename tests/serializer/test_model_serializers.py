import pytest
from marshmallow import ValidationError

from cyclebook.serializer.models import BookingSchema, RideHistorySchema
from cyclebook.serializer.misc import CredentialsSchema, StartRideSchema
from cyclebook.models import Role


class TestBookingSerializer:

    async def test_serialize_waiting(self, random_booking):
        """Assert that a booking that has not started has no timings or outcome."""
        data = random_booking.serialize()
        assert "start_time" not in data
        assert "cost" not in data
        assert "verification_code" not in data

    async def test_serialize_with_code(self, random_booking):
        data = random_booking.serialize(include_code=True)
        assert data["verification_code"] == random_booking.verification_code

    async def test_serialize_stopped(self, booking_manager, started_booking, clock):
        clock.advance(minutes=16)
        booking = await booking_manager.stop(started_booking.id, "Gate1")

        data = BookingSchema().dump(booking.serialize())
        assert data["duration"] == 16
        assert data["cost"] == 20
        assert data["drop_location"] == "Gate1"
        assert BookingSchema().load(data)["stopped"]

    def test_load_outcome_without_stop(self):
        """Assert that an unstopped booking cannot carry a cost."""
        with pytest.raises(ValidationError):
            BookingSchema().load({"id": 1, "place": "Library", "cycle": "Cycle 1", "started": True,
                                  "stopped": False, "cost": 10})

    def test_load_stop_without_outcome(self):
        with pytest.raises(ValidationError):
            BookingSchema().load({"id": 1, "place": "Library", "cycle": "Cycle 1", "started": True, "stopped": True})


class TestRideHistorySerializer:

    async def test_serialize(self, booking_manager, started_booking, random_rider):
        await booking_manager.stop(started_booking.id, "Gate2")
        entry = await random_rider.rides.all().first()

        data = RideHistorySchema().dump(entry.serialize())
        assert data["booking_id"] == started_booking.id
        assert data["drop_location"] == "Gate2"
        assert "timestamp" in data


class TestRequestSchemas:

    def test_credentials(self):
        data = CredentialsSchema().load({"email": "123456789@sastra.ac.in", "password": "hunter2", "role": "host"})
        assert data["role"] is Role.HOST

    @pytest.mark.parametrize("data", [
        {"email": "123456789@sastra.ac.in", "password": "hunter2", "role": "admin"},
        {"email": "123456789@sastra.ac.in", "password": "", "role": "rider"},
        {"email": "123456789@sastra.ac.in", "role": "rider"},
    ])
    def test_invalid_credentials(self, data):
        with pytest.raises(ValidationError):
            CredentialsSchema().load(data)

    def test_booking_id_must_be_integer(self):
        with pytest.raises(ValidationError):
            StartRideSchema().load({"booking_id": "1", "code": "ABCDEF"})
