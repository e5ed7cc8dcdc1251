"""
Middleware
----------
"""
from http import HTTPStatus

from aiohttp import web
from aiohttp.abc import Request
from aiohttp.web_middlewares import middleware

from cyclebook import logger
from cyclebook.serializer import JSendStatus, JSendSchema
from cyclebook.service.errors import ServiceError

response_schema = JSendSchema()


@middleware
async def error_middleware(request: Request, handler):
    """
    Translates the errors raised by the service layer into JSend responses.

    Expected failures are answered with a ``fail`` and the status the error
    carries. Anything else is logged and answered with a generic ``error``.
    """

    try:
        return await handler(request)
    except ServiceError as error:
        return web.json_response(response_schema.dump({
            "status": JSendStatus.FAIL,
            "data": {"message": error.message, **error.data}
        }), status=error.status)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.rel_url)
        return web.json_response(response_schema.dump({
            "status": JSendStatus.ERROR,
            "message": "Something went wrong on our end. Please try again later.",
            "code": HTTPStatus.INTERNAL_SERVER_ERROR.value
        }), status=HTTPStatus.INTERNAL_SERVER_ERROR)
