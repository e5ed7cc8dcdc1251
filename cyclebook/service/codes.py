"""
Verification Codes
------------------

Short codes a rider reads out to a host to prove which booking is theirs.
They only live for as long as the booking is waiting to start, so they are
not checked for uniqueness.
"""

import secrets

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ123456789"
"""Uppercase letters and digits, without the easily confused I, O and 0."""

CODE_LENGTH = 6


def generate_code(length: int = CODE_LENGTH) -> str:
    """Draws each character of the code independently from the alphabet."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
