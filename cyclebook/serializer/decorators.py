"""
Decorators
----------

This module defines some decorators that significantly reduce
the boilerplate when handling JSON IO. These are used on the
routes of the system to gracefully serialize, deserialize, and
validate the data coming in and out of the app.

.. note:: Annotating a route with ``@expects(None)`` or ``@returns(None)``
    is purely for clarity and has no effect. It may however make the
    route definitions easier to read.
"""

from functools import wraps
from http import HTTPStatus
from json import JSONDecodeError
from typing import Optional

from aiohttp import web
from aiohttp.web_urldispatcher import View
from marshmallow import Schema, ValidationError
from marshmallow_jsonschema import JSONSchema

from cyclebook import logger
from cyclebook.serializer.jsend import JSendSchema, JSendStatus

JSON_BODY = "json"
QUERY_STRING = "query"


def _fail(message, status=HTTPStatus.BAD_REQUEST, **data):
    response_data = JSendSchema().dump({
        "status": JSendStatus.FAIL,
        "data": {"message": message, **data}
    })
    return web.json_response(response_data, status=status)


def expects(schema: Optional[Schema], into="data", source=JSON_BODY):
    """
    A decorator that asserts that the data supplied
    to the route validates the given :class:`~marshmallow.Schema`.

    It also handles missing data, malformed input, and invalid schemas.
    If the data is valid, it is stored on the request under the key
    supplied to the ``into`` parameter, otherwise it displays a
    descriptive error to the user.

    .. code:: python

        @expects(BookSchema(), "my_data")
        async def post(self):
            valid_data = self.request["my_data"]

    :param schema: The schema to validate.
    :param into: The key to store the validated data in.
    :param source: Where to read the data from, either the JSON body or the query string.
    """

    # if schema is none, then bypass the decorator
    if schema is None:
        return lambda x: x

    # assert the schema is of the right type
    if not isinstance(schema, Schema):
        raise TypeError(f"Expected a Schema, not {type(schema)}")

    if source not in (JSON_BODY, QUERY_STRING):
        raise ValueError(f"Cannot read data from {source}.")

    json_schema = JSONSchema().dump(schema)["definitions"][type(schema).__name__]

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):

            if source == QUERY_STRING:
                raw_data = dict(self.request.query)
            else:
                # if the request is not JSON or missing, return a warning and the valid schema
                if not self.request.body_exists or not self.request.content_type == "application/json":
                    return _fail(
                        f"This route ({self.request.method}: {self.request.rel_url}) only accepts JSON.",
                        schema=json_schema
                    )

                try:
                    raw_data = await self.request.json()
                except JSONDecodeError as err:
                    return _fail("Could not parse supplied JSON.", errors=err.args)

            try:
                self.request[into] = schema.load(raw_data)
            except ValidationError as err:
                # if the data does not match the schema, return the errors and the valid schema
                return _fail("The request did not validate properly.", errors=err.messages, schema=json_schema)

            # if everything passes, execute the original function
            return await original_function(self, **kwargs)

        return new_func

    return decorator


def returns(schema: Optional[Schema] = None, return_code: HTTPStatus = HTTPStatus.OK):
    """
    A decorator that dumps the data returned
    from the route into the given :class:`~marshmallow.Schema`.

    As long as this decorator is applied to the route,
    it is possible to return plain python dictionaries.

    .. code:: python

        @returns(JSendSchema())
        async def get(self):
            result = await do_stuff()
            return {
                "status": JSendStatus.SUCCESS,
                "data": result
            }

    :param schema: The schema that the output data must conform to
    :param return_code: The code to return
    """

    # if no schema is defined, pass through
    if schema is None:
        return lambda x: x

    def decorator(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            response_data = await original_function(self, **kwargs)

            try:
                return web.json_response(schema.dump(response_data), status=return_code)
            except ValidationError as err:
                logger.exception("Could not serialize the response of %s", original_function.__qualname__)
                response_data = JSendSchema().dump({
                    "status": JSendStatus.ERROR,
                    "data": err.messages,
                    "message": "We tried to send you data back, but it came out wrong.",
                    "code": HTTPStatus.INTERNAL_SERVER_ERROR.value
                })
                return web.json_response(response_data, status=HTTPStatus.INTERNAL_SERVER_ERROR)

        return new_func

    return decorator
