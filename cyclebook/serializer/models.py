"""
Model Serializers
-----------------

Defines serializers for the various models in the system,
and for the payloads of the events broadcast to observers.
"""

from marshmallow import Schema, validates_schema, ValidationError
from marshmallow.fields import Integer, Boolean, String, Email, DateTime


class BookingSchema(Schema):
    id = Integer(required=True)
    account_id = Integer()
    owner_email = Email()

    place = String(required=True)
    cycle = String(required=True)
    verification_code = String()

    started = Boolean(required=True)
    stopped = Boolean(required=True)

    created_at = DateTime()
    start_time = DateTime()
    end_time = DateTime()
    duration = Integer()
    cost = Integer()
    drop_location = String()

    @validates_schema
    def assert_outcome_with_end_time(self, data, **kwargs):
        """
        Asserts that a stopped booking includes its outcome, and an unstopped one does not.
        """
        outcome = ("end_time", "duration", "cost")
        if data.get("stopped") and not all(key in data for key in outcome):
            raise ValidationError("A stopped booking must include its end time, duration and cost.")
        if not data.get("stopped") and any(key in data for key in outcome):
            raise ValidationError("Only stopped bookings have an end time, duration or cost.")


class RideHistorySchema(Schema):
    """The schema corresponding to the :class:`~cyclebook.models.ride.RideHistoryEntry` model."""

    id = Integer(required=True)
    account_id = Integer()
    booking_id = Integer()
    duration = Integer(required=True)
    cost = Integer(required=True)
    drop_location = String(required=True)
    timestamp = DateTime(required=True)


class CycleAvailabilitySchema(Schema):
    cycle = String(required=True)
    available = Boolean(required=True)


class CycleStatusSchema(CycleAvailabilitySchema):
    place = String(required=True)


class RideStartedSchema(Schema):
    booking_id = Integer(required=True)
    start_time = DateTime(required=True)


class RideStoppedSchema(Schema):
    booking_id = Integer(required=True)
    duration = Integer(required=True)
    cost = Integer(required=True)
    drop_location = String(required=True)
