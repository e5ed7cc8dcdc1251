"""
Booking Related Views
---------------------

Riders book cycles. Hosts see the open bookings, and start and stop
the rides once the rider is at the stand.
"""
from http import HTTPStatus

from aiohttp_apispec import docs
from marshmallow.fields import String, Integer

from cyclebook.models import Account, Role
from cyclebook.permissions import requires, ValidToken, HasRole
from cyclebook.serializer import JSendSchema, JSendStatus, Many
from cyclebook.serializer.decorators import expects, returns
from cyclebook.serializer.misc import BookSchema, StartRideSchema, StopRideSchema
from cyclebook.serializer.models import BookingSchema
from cyclebook.service.access.accounts import get_account_by_id
from cyclebook.service.access.bookings import get_active_bookings
from cyclebook.views.base import BaseView
from cyclebook.views.decorators import match_getter, GetFrom


class BookView(BaseView):
    """
    Books a cycle for the rider.
    """
    url = "/book"
    name = "book"
    with_account = match_getter(get_account_by_id, 'account', account_id=GetFrom.SESSION)

    @docs(summary="Book A Cycle")
    @requires(ValidToken() & HasRole(Role.RIDER))
    @with_account
    @expects(BookSchema())
    @returns(
        JSendSchema.of(booking=BookingSchema(exclude=("owner_email",)), verification_code=String()),
        HTTPStatus.CREATED
    )
    async def post(self, account: Account):
        """
        The verification code is only ever shown here, to the rider,
        who reads it to the host when collecting the cycle.
        """
        booking = await self.booking_manager.create(account, **self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "booking": booking.serialize(include_code=True),
                "verification_code": booking.verification_code
            }
        }


class BookingsView(BaseView):
    """
    Lists the bookings that have not been stopped, oldest first.
    """
    url = "/bookings"
    name = "bookings"

    @docs(summary="Get Open Bookings")
    @requires(ValidToken() & HasRole(Role.HOST))
    @returns(JSendSchema.of(bookings=Many(BookingSchema(exclude=("verification_code",)))))
    async def get(self):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"bookings": [
                booking.serialize(include_owner=True) for booking in await get_active_bookings()
            ]}
        }


class StartRideView(BaseView):
    """
    Starts the ride once the host has checked the rider's verification code.
    """
    url = "/start-ride"
    name = "start_ride"

    @docs(summary="Start A Ride")
    @requires(ValidToken() & HasRole(Role.HOST))
    @expects(StartRideSchema())
    @returns(JSendSchema.of(message=String(), booking=BookingSchema(exclude=("verification_code", "owner_email"))))
    async def post(self):
        booking = await self.booking_manager.start(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "message": "Ride started successfully.",
                "booking": booking.serialize()
            }
        }


class StopRideView(BaseView):
    """
    Stops a ride, pricing it and adding it to the rider's history.
    """
    url = "/stop-ride"
    name = "stop_ride"

    @docs(summary="Stop A Ride")
    @requires(ValidToken() & HasRole(Role.HOST))
    @expects(StopRideSchema())
    @returns(JSendSchema.of(duration=Integer(), cost=Integer()))
    async def post(self):
        booking = await self.booking_manager.stop(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"duration": booking.duration, "cost": booking.cost}
        }
