"""
Ride History
---------------------------
"""
from datetime import datetime

from tortoise import Model, fields


class RideHistoryEntry(Model):
    """An immutable record of a completed ride, written once when the ride is stopped."""

    id = fields.IntField(pk=True)
    account = fields.ForeignKeyField(model_name="models.Account", related_name="rides")
    booking = fields.OneToOneField(model_name="models.Booking", related_name="history_entry")

    duration = fields.IntField()
    cost = fields.IntField()
    drop_location = fields.CharField(max_length=255)
    timestamp: datetime = fields.DatetimeField(auto_now_add=True)

    def serialize(self):
        return {
            "id": self.id,
            "account_id": self.account_id,
            "booking_id": self.booking_id,
            "duration": self.duration,
            "cost": self.cost,
            "drop_location": self.drop_location,
            "timestamp": self.timestamp,
        }
