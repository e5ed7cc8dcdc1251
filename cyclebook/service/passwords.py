"""
Passwords
---------

Hashes credentials with argon2id (via libsodium).
"""

from nacl import pwhash
from nacl.exceptions import InvalidkeyError


def hash_password(password: str) -> str:
    """Hashes a password into a self-describing, salted string."""
    return pwhash.argon2id.str(
        password.encode(),
        opslimit=pwhash.argon2id.OPSLIMIT_INTERACTIVE,
        memlimit=pwhash.argon2id.MEMLIMIT_INTERACTIVE,
    ).decode()


def check_password(password: str, password_hash: str) -> bool:
    """Checks the password against a hash created by :func:`hash_password`."""
    try:
        return pwhash.verify(password_hash.encode(), password.encode())
    except InvalidkeyError:
        return False
