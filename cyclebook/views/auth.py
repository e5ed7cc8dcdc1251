"""
Account Related Views
---------------------

Handles logging in (and the implicit registration), checking
and revoking session tokens, and resetting passwords.
"""
from aiohttp_apispec import docs
from marshmallow.fields import String

from cyclebook.models import Account, Role
from cyclebook.permissions import requires, ValidToken
from cyclebook.serializer import JSendSchema, JSendStatus, EnumField
from cyclebook.serializer.decorators import expects, returns
from cyclebook.serializer.misc import CredentialsSchema, ResetPasswordSchema
from cyclebook.service.access.accounts import get_account_by_id
from cyclebook.service.accounts import register_or_login, reset_password
from cyclebook.views.base import BaseView
from cyclebook.views.decorators import match_getter, GetFrom


class RegisterOrLoginView(BaseView):
    """
    Logs in to an account, creating it if the email is not yet known.
    """
    url = "/register-or-login"
    name = "register_or_login"

    @docs(summary="Register Or Log In")
    @expects(CredentialsSchema())
    @returns(JSendSchema.of(token=String(), role=EnumField(Role)))
    async def post(self):
        """
        The response is the same whether the account was just created or
        already existed, so the client never learns which one happened.
        """
        account, _ = await register_or_login(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {
                "token": self.token_manager.issue_token(account),
                "role": account.role
            }
        }


class VerifyTokenView(BaseView):
    """
    Checks that a session token is still valid.
    """
    url = "/verify-token"
    name = "verify_token"
    with_account = match_getter(get_account_by_id, 'account', account_id=GetFrom.SESSION)

    @docs(summary="Verify Session Token")
    @requires(ValidToken())
    @with_account
    @returns(JSendSchema.of(role=EnumField(Role)))
    async def get(self, account: Account):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"role": account.role}
        }


class LogoutView(BaseView):
    """
    Revokes the session token used to make the request.
    """
    url = "/logout"
    name = "logout"

    @docs(summary="Log Out")
    @requires(ValidToken())
    @returns(JSendSchema.of(message=String()))
    async def post(self):
        self.token_manager.revoke(self.request["session"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"message": "Logged out successfully."}
        }


class ResetPasswordView(BaseView):
    """
    Replaces the password of an existing account.
    """
    url = "/reset-password"
    name = "reset_password"

    @docs(summary="Reset Password")
    @expects(ResetPasswordSchema())
    @returns(JSendSchema.of(message=String()))
    async def post(self):
        await reset_password(**self.request["data"])
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"message": "Password reset successfully."}
        }
