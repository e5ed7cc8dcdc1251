"""
Accounts
--------

Registration, login and password resets.

There is no separate sign-up: the first login with an unknown email creates
the account, and the caller receives the same response either way. Only the
server log tells the two apart.
"""
import re
from typing import Tuple

from cyclebook import logger
from cyclebook.config import institution_domain
from cyclebook.models import Account, Role
from cyclebook.service.access.accounts import get_account, create_account, update_password
from cyclebook.service.errors import InvalidRequestError, AuthenticationError, NotFoundError
from cyclebook.service.passwords import hash_password, check_password


def email_pattern(domain: str = institution_domain):
    """Matches a nine digit student number at the institution's domain."""
    return re.compile(rf"^\d{{9}}@{re.escape(domain)}$", re.IGNORECASE)


def is_valid_email(email: str, domain: str = institution_domain) -> bool:
    return email_pattern(domain).match(email) is not None


def validate_email(email: str, domain: str = institution_domain):
    """
    :raises InvalidRequestError: If the email is not an institutional email.
    """
    if not is_valid_email(email, domain):
        raise InvalidRequestError(
            f"Email must be a 9-digit number followed by @{domain} (e.g., 123456789@{domain}).",
            email=email
        )


async def register_or_login(email: str, password: str, role: Role) -> Tuple[Account, bool]:
    """
    Logs in to an account, creating it if it does not exist.

    :return: The account and whether it was created.
    :raises InvalidRequestError: If the email is not an institutional email.
    :raises AuthenticationError: If the account exists and the password is wrong.
    :raises AccountExistsError: If the email is registered under the other role.
    """
    logger.info("Attempting login/register for %s as %s", email, role.value)
    validate_email(email)

    account = await get_account(email, role)
    if account is None:
        account = await create_account(email, hash_password(password), role)
        logger.info("Registered new account %s", account)
        return account, True

    if not check_password(password, account.password_hash):
        logger.info("Password mismatch for %s", account)
        raise AuthenticationError("Incorrect password. Please try again.")

    logger.info("Authenticated account %s", account)
    return account, False


async def reset_password(email: str, new_password: str, role: Role) -> Account:
    """
    Replaces the password of an account.

    :raises InvalidRequestError: If the email is not an institutional email.
    :raises NotFoundError: If there is no such account.
    """
    validate_email(email)

    account = await get_account(email, role)
    if account is None:
        raise NotFoundError("User not found.", email=email)

    await update_password(account, hash_password(new_password))
    logger.info("Password reset for %s", account)
    return account
