"""
Decorators
-------------------------
"""
from enum import Enum
from functools import wraps
from inspect import isawaitable
from typing import Any, Dict

from aiohttp import web
from aiohttp.web_request import Request
from aiohttp.web_urldispatcher import View
from apispec.ext.marshmallow import OpenAPIConverter, resolver

from cyclebook.serializer import JSendStatus, JSendSchema

converter = OpenAPIConverter("3.0.2", resolver, None)


class GetFrom(Enum):
    SESSION = "session"
    """The account id of the session verified by the :class:`~cyclebook.permissions.ValidToken` permission."""


def flatten(error):
    errors = []
    for sub_error in error.args:
        if isinstance(sub_error, Exception):
            errors += flatten(sub_error)
        else:
            errors.append(sub_error)
    return errors


def resolve_match_map(request: Request, match_map) -> Dict[str, Any]:
    resolved_matches = {}
    errors = []

    for key, value in match_map.items():
        if value is not GetFrom.SESSION:
            raise TypeError(f"match_getter incorrectly configured (doesn't support {value!r})")
        if "session" not in request:
            errors.append(ValueError("Missing session."))
            continue
        resolved_matches[key] = request["session"].account_id

    if errors:
        raise ValueError(*errors)
    return resolved_matches


def match_getter(getter_function, injection_parameter: str, **match_map: GetFrom):
    """
    Automatically fetches and includes an item, or 404's if it doesn't exist.

    .. code-block:: python

        # example usage
        @match_getter(get_account_by_id, 'account', account_id=GetFrom.SESSION)
        async def get(self, account: Account)
            return web.json_response(data=account.serialize())

    :param getter_function: The function to fetch the item from.
    :param injection_parameter: The name of the parameter to pass the object as.
    :param match_map: Associates a kwarg on the ``getter_function`` with the session.
    :return: A decorator that wraps the response and passes in the object.
    """

    def attach_instance(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            try:
                params = resolve_match_map(self.request, match_map)
            except (ValueError, TypeError) as error:
                response = {
                    "status": JSendStatus.FAIL,
                    "data": {
                        "message": "Errors with your request.",
                        "errors": flatten(error)
                    }
                }
                raise web.HTTPBadRequest(text=JSendSchema().dumps(response), content_type='application/json')
            item = getter_function(**params)
            if isawaitable(item):
                item = await item

            if item is None:
                response = {
                    "status": JSendStatus.FAIL,
                    "data": {
                        "message": f'Could not find {injection_parameter} with the given params.',
                        "params": params
                    }
                }
                raise web.HTTPNotFound(text=JSendSchema().dumps(response), content_type='application/json')

            return await original_function(self, **kwargs, **{injection_parameter: item})

        setup_apispec(new_func, original_function)

        return new_func

    def setup_apispec(new_func, original_function):
        """Set up the apispec documentation on the new function"""
        if not hasattr(original_function, "__apispec__"):
            new_func.__apispec__ = {"schemas": [], "responses": {}, "parameters": []}
        else:
            new_func.__apispec__ = original_function.__apispec__

        if not hasattr(original_function, "__schemas__"):
            new_func.__schemas__ = []
        else:
            new_func.__schemas__ = original_function.__schemas__

        json_schema = converter.schema2jsonschema(JSendSchema(only=("status", "data")))

        new_func.__apispec__["responses"]["404"] = {
            "description": "resource_missing",
            "content": {"application/json": {"schema": json_schema}}
        }

        if "400" not in new_func.__apispec__["responses"]:
            new_func.__apispec__["responses"]["400"] = {
                "description": "request_errors",
                "content": {"application/json": {"schema": json_schema}}
            }

    return attach_instance
