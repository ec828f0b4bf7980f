"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from ticket_verifier.domain.users.repositories import PasswordHasher

# bcrypt only looks at the first 72 bytes; recent releases raise instead of truncating.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(bcrypt.checkpw(_encode(password), hashed.encode("utf-8")))
        except (ValueError, TypeError):
            # malformed or foreign hash format
            return False
