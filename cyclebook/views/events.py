"""
Event Views
-----------
"""
from json import JSONDecodeError

from aiohttp import web, WSMsgType
from aiohttp_apispec import docs
from marshmallow import ValidationError

from cyclebook import logger
from cyclebook.serializer.misc import SocketCommandSchema
from cyclebook.views.base import BaseView

command_schema = SocketCommandSchema()


class EventSocketView(BaseView):
    """
    Streams the booking events to anyone watching, such as a host's dashboard.

    Every frame is a JSON object of the form ``{"event": topic, "data": payload}``.
    By default a socket receives every event. It may send commands to narrow that down:

    .. code-block:: python

        await ws.send_json({"action": "subscribe", "topics": ["rideStarted", "rideStopped"]})
        await ws.send_json({"action": "join_ride", "booking_id": 3})

    Invalid commands are answered with an ``{"error": ...}`` frame and otherwise ignored.
    """

    url = "/events"
    name = "events"

    @docs(summary="Connect Event Socket")
    async def get(self):
        socket = web.WebSocketResponse()
        await socket.prepare(self.request)

        self.notification_bus.add(socket)
        logger.info("Event socket connected from %s", self.request.remote)

        try:
            async for msg in socket:
                if msg.type != WSMsgType.TEXT:
                    continue

                try:
                    command = command_schema.load(msg.json())
                except (JSONDecodeError, ValidationError) as error:
                    errors = error.messages if isinstance(error, ValidationError) else "Could not parse JSON."
                    await socket.send_json({"error": errors})
                    continue

                await self._handle_command(socket, command)
        finally:
            self.notification_bus.remove(socket)
            logger.info("Event socket disconnected from %s", self.request.remote)

        return socket

    async def _handle_command(self, socket: web.WebSocketResponse, command):
        action = command["action"]

        if action == "subscribe":
            try:
                self.notification_bus.subscribe(socket, command.get("topics", []))
            except ValueError:
                await socket.send_json({"error": {"topics": ["Unknown topic."]}})
        elif "booking_id" not in command:
            await socket.send_json({"error": {"booking_id": ["Missing data for required field."]}})
        elif action == "join_ride":
            self.notification_bus.join_ride(socket, command["booking_id"])
        else:
            self.notification_bus.leave_ride(socket, command["booking_id"])
