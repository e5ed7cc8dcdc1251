"""
Cycle Related Views
-------------------
"""
from aiohttp_apispec import docs

from cyclebook.serializer import JSendSchema, JSendStatus, Many
from cyclebook.serializer.decorators import expects, returns, QUERY_STRING
from cyclebook.serializer.misc import AvailabilityQuerySchema
from cyclebook.serializer.models import CycleAvailabilitySchema
from cyclebook.service.access.bookings import get_availability
from cyclebook.views.base import BaseView


class CycleAvailabilityView(BaseView):
    """
    Lists the cycles at a place and whether they can be booked.
    """
    url = "/cycle-availability"
    name = "cycle_availability"

    @docs(summary="Get Cycle Availability")
    @expects(AvailabilityQuerySchema(), source=QUERY_STRING)
    @returns(JSendSchema.of(cycles=Many(CycleAvailabilitySchema())))
    async def get(self):
        place = self.request["data"]["place"]
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"cycles": await get_availability(place, self.booking_manager.cycles)}
        }
