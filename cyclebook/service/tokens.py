"""
Session Tokens
--------------

Issues and verifies the signed, time-limited tokens that identify a
logged-in account. Tokens are HS256 JWTs carrying the account id and
role. Logging out revokes a token until it would have expired anyway.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict
from uuid import uuid4

from aiohttp.web_request import Request
from jose import jwt, ExpiredSignatureError, JWTError

from cyclebook import logger
from cyclebook.models import Account, Role

ALGORITHM = "HS256"


class TokenVerificationError(Exception):

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class MissingTokenError(TokenVerificationError):
    """Raised when the request carries no token at all."""


@dataclass(frozen=True)
class Session:
    """The verified contents of a session token."""

    account_id: int
    role: Role
    token_id: str
    expires: datetime


class TokenManager:
    """
    Signs session tokens with the configured secret key and keeps
    track of the tokens revoked before their expiry.
    """

    def __init__(self, secret_key: str, lifetime: timedelta = timedelta(hours=1),
                 clock: Callable[[], datetime] = None):
        if not secret_key:
            raise ValueError("A secret key is required to sign session tokens.")

        self._secret_key = secret_key
        self.lifetime = lifetime
        self._now = clock if clock is not None else lambda: datetime.now(timezone.utc)
        self._revoked: Dict[str, datetime] = {}
        """Maps revoked token ids to the time they expire."""

    def issue_token(self, account: Account) -> str:
        """Creates a new token for the given account."""
        issued = self._now()
        claims = {
            "sub": str(account.id),
            "role": account.role.value,
            "jti": uuid4().hex,
            "iat": issued,
            "exp": issued + self.lifetime,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify_token(self, token) -> Session:
        """
        Given a token, verifies it, returning the session it represents.

        :raises TokenVerificationError: When the provided token is invalid, expired or revoked.
        """
        if not isinstance(token, str):
            raise TokenVerificationError(f"Token must be of type string, not {type(token).__name__}.")

        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise TokenVerificationError("Token is expired.") from e
        except JWTError as e:
            raise TokenVerificationError("Token is invalid.") from e

        try:
            session = Session(
                account_id=int(claims["sub"]),
                role=Role(claims["role"]),
                token_id=claims["jti"],
                expires=datetime.fromtimestamp(claims["exp"], timezone.utc),
            )
        except (KeyError, ValueError) as e:
            raise TokenVerificationError("Token is invalid.") from e

        if session.token_id in self._revoked:
            raise TokenVerificationError("Token has been revoked.")

        return session

    def revoke(self, session: Session):
        """Revokes the token behind a session, effective immediately."""
        self._revoked[session.token_id] = session.expires

    def remove_expired(self):
        """Forgets revoked tokens that have expired, as they fail verification regardless."""
        now = self._now()
        self._revoked = {token_id: expires for token_id, expires in self._revoked.items() if expires > now}

    async def remove_all_expired(self, removal_period: timedelta):
        """Periodically clears the expired revocations."""
        while True:
            await asyncio.sleep(removal_period.total_seconds())
            logger.debug("Clearing expired token revocations")
            self.remove_expired()


def verify_token(request: Request) -> Session:
    """
    Checks a request for the existence of a valid Authorization header.

    :param request: The request to check.
    :return: The verified session.
    :raises MissingTokenError: When there is no Authorization header.
    :raises TokenVerificationError: When the Authorization header is invalid.
    """
    if "Authorization" not in request.headers:
        raise MissingTokenError("You must supply your session token.")

    if not request.headers["Authorization"].startswith("Bearer "):
        raise TokenVerificationError("The Authorization header must be of the format \"Bearer $TOKEN\".")

    return request.app["token_manager"].verify_token(request.headers["Authorization"][7:])
