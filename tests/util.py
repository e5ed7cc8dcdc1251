from datetime import datetime, timedelta, timezone

from faker import Faker

from cyclebook.config import institution_domain

fake = Faker()


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime = None):
        self.now = now if now is not None else datetime.now(timezone.utc)

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

    def __call__(self) -> datetime:
        return self.now


def random_email():
    """A student number at the institution's domain."""
    return f"{fake.numerify('#########')}@{institution_domain}"
