from marshmallow import Schema, EXCLUDE, validate
from marshmallow.fields import String, Integer, List

from cyclebook.models import Role
from cyclebook.serializer.fields import EnumField

required_text = dict(required=True, validate=validate.Length(min=1))


class CredentialsSchema(Schema):
    """The schema of the register-or-login request."""
    email = String(metadata={"description": "A 9-digit number at the institution's domain."}, **required_text)
    password = String(**required_text)
    role = EnumField(Role, required=True)


class ResetPasswordSchema(Schema):
    email = String(**required_text)
    new_password = String(**required_text)
    role = EnumField(Role, required=True)


class AvailabilityQuerySchema(Schema):

    class Meta:
        unknown = EXCLUDE

    place = String(**required_text)


class BookSchema(Schema):
    place = String(**required_text)
    cycle = String(**required_text)


class StartRideSchema(Schema):
    booking_id = Integer(required=True, strict=True)
    code = String(**required_text)


class StopRideSchema(Schema):
    booking_id = Integer(required=True, strict=True)
    drop_location = String(**required_text)


class SocketCommandSchema(Schema):
    """
    A message sent by an observer over the event socket.

    - ``subscribe`` limits the topics sent to the socket (an empty list restores all)
    - ``join_ride`` and ``leave_ride`` add or remove the socket from a booking's group
    """

    class Meta:
        unknown = EXCLUDE

    action = String(required=True, validate=validate.OneOf(("subscribe", "join_ride", "leave_ride")))
    topics = List(String())
    booking_id = Integer(strict=True)
