"""
Account
---------------------------
"""
from enum import Enum

from tortoise import Model, fields


class Role(str, Enum):
    """We subclass string to make json serialization work."""
    RIDER = "rider"
    HOST = "host"


class Account(Model):
    """
    Represents an account in the system.

    Accounts are created on the first login attempt with an unknown
    email and are never deleted. The email is unique across roles.
    """

    id = fields.IntField(pk=True)
    email = fields.CharField(max_length=255, unique=True)
    password_hash = fields.CharField(max_length=255)
    role: Role = fields.CharEnumField(Role, max_length=16)

    def __str__(self):
        return f"[{self.id}] {self.email} ({self.role.value})"
