"""
Decorators
----------
"""

from functools import wraps

from aiohttp import web
from aiohttp.web_urldispatcher import View

from cyclebook.permissions.permission import RoutePermissionError, Permission
from cyclebook.serializer import JSendSchema, JSendStatus


def requires(permission: Permission):
    """
    A decorator that requires the given permission to be met to continue.

    Failures are reported with the status of the error, so a missing
    token is a 401 while an invalid token or the wrong role is a 403.
    """

    if not isinstance(permission, Permission):
        raise TypeError(f"Expected a Permission, not {type(permission)}")

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            try:
                await permission(self, **kwargs)
            except RoutePermissionError as error:
                response_schema = JSendSchema()
                return web.json_response(response_schema.dump({
                    "status": JSendStatus.FAIL,
                    "data": {
                        "message": f"You cannot do that because {str(error)}.",
                        "reasons": error.serialize()
                    }
                }), status=error.status)

            return await original_function(self, **kwargs)

        return new_func

    return decorator
