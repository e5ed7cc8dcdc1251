"""
Booking
---------------------------

A booking moves through the states::

    booked (started=False, stopped=False)
      -> started (started=True, stopped=False)
      -> stopped (started=True, stopped=True)

A started, unstopped booking is *active* and occupies its cycle.
Duration and cost are frozen when the booking is stopped.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from tortoise import Model, fields


class Booking(Model):
    id = fields.IntField(pk=True)
    account = fields.ForeignKeyField(model_name="models.Account", related_name="bookings")

    place = fields.CharField(max_length=255)
    cycle = fields.CharField(max_length=64)
    verification_code = fields.CharField(max_length=6)

    started = fields.BooleanField(default=False)
    stopped = fields.BooleanField(default=False)

    created_at: datetime = fields.DatetimeField(auto_now_add=True)
    start_time: Optional[datetime] = fields.DatetimeField(null=True)
    end_time: Optional[datetime] = fields.DatetimeField(null=True)

    duration = fields.IntField(null=True)
    """The length of the ride, in whole minutes."""

    cost = fields.IntField(null=True)
    drop_location = fields.CharField(max_length=255, null=True)

    def serialize(self, *, include_code=False, include_owner=False) -> Dict[str, Any]:
        """
        Serializes the booking into a format that can be turned into JSON.

        :param include_code: Whether to include the verification code (only ever shown to the owner).
        :param include_owner: Whether to include the owner's email (requires the account to be fetched).
        """
        data = {
            "id": self.id,
            "account_id": self.account_id,
            "place": self.place,
            "cycle": self.cycle,
            "started": self.started,
            "stopped": self.stopped,
            "created_at": self.created_at,
        }

        if include_code:
            data["verification_code"] = self.verification_code

        if include_owner:
            data["owner_email"] = self.account.email

        if self.start_time is not None:
            data["start_time"] = self.start_time

        if self.stopped:
            data["end_time"] = self.end_time
            data["duration"] = self.duration
            data["cost"] = self.cost
            data["drop_location"] = self.drop_location

        return data

    def __str__(self):
        return f"[{self.id}] {self.cycle} at {self.place}"
