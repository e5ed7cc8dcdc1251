"""
Ride Related Views
------------------
"""
from aiohttp_apispec import docs

from cyclebook.models import Account, Role
from cyclebook.permissions import requires, ValidToken, HasRole
from cyclebook.serializer import JSendSchema, JSendStatus, Many
from cyclebook.serializer.decorators import returns
from cyclebook.serializer.models import RideHistorySchema
from cyclebook.service.access.accounts import get_account_by_id
from cyclebook.service.access.bookings import get_ride_history
from cyclebook.views.base import BaseView
from cyclebook.views.decorators import match_getter, GetFrom


class RideHistoryView(BaseView):
    """
    Lists the completed rides of the rider, oldest first.
    """
    url = "/ride-history"
    name = "ride_history"
    with_account = match_getter(get_account_by_id, 'account', account_id=GetFrom.SESSION)

    @docs(summary="Get Ride History")
    @requires(ValidToken() & HasRole(Role.RIDER))
    @with_account
    @returns(JSendSchema.of(rides=Many(RideHistorySchema())))
    async def get(self, account: Account):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rides": [ride.serialize() for ride in await get_ride_history(account)]}
        }
