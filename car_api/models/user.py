"""
User model held by the credential store.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Registered user. Only the bcrypt hash of the password is kept."""

    id: int
    username: str
    password_hash: str
