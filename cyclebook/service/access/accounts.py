"""
Accounts
--------
"""
from typing import Optional

from tortoise.exceptions import IntegrityError

from cyclebook.models import Account, Role
from cyclebook.service.errors import ConflictError


class AccountExistsError(ConflictError):
    """Raised when an email is already registered (under any role)."""


async def get_account(email: str, role: Role) -> Optional[Account]:
    """
    :param email: The email of the account to get.
    :param role: The role the account was registered with.
    :return: The matching account, if any.
    """
    return await Account.filter(email=email.lower(), role=role).first()


async def get_account_by_id(account_id: int) -> Optional[Account]:
    return await Account.filter(id=account_id).first()


async def create_account(email: str, password_hash: str, role: Role) -> Account:
    """
    Creates a new account.

    :raises AccountExistsError: When an account with the given email already exists.
    """
    try:
        return await Account.create(email=email.lower(), password_hash=password_hash, role=role)
    except IntegrityError as error:
        raise AccountExistsError(f"An account for {email} already exists.", email=email) from error


async def update_password(account: Account, password_hash: str) -> Account:
    account.password_hash = password_hash
    await account.save(update_fields=["password_hash"])
    return account
