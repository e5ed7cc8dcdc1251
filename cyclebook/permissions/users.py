from http import HTTPStatus

from aiohttp.web_urldispatcher import View

from cyclebook.models import Role
from cyclebook.permissions.permission import RoutePermissionError, Permission
from cyclebook.service.tokens import verify_token, TokenVerificationError, MissingTokenError


class ValidToken(Permission):
    """Asserts that the request has a valid session token, and stores the session on the request."""

    async def __call__(self, view: View, **kwargs):
        try:
            session = verify_token(view.request)
        except MissingTokenError as error:
            raise RoutePermissionError(error.message, status=HTTPStatus.UNAUTHORIZED)
        except TokenVerificationError as error:
            raise RoutePermissionError(error.message, status=HTTPStatus.FORBIDDEN)
        else:
            view.request["session"] = session

    def __repr__(self):
        return "ValidToken()"


class HasRole(Permission):
    """Asserts that the session belongs to an account with the given role."""

    def __init__(self, role: Role):
        self.role = role

    async def __call__(self, view: View, **kwargs):
        # the token check reports a missing or rejected session
        if "session" not in view.request:
            return

        if view.request["session"].role is not self.role:
            raise RoutePermissionError(f"Only a {self.role.value} can do this.")

    def __repr__(self):
        return f"HasRole({self.role.value})"
