# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, stateless session tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from ticket_verifier.domain.users.entities import SessionClaims
from ticket_verifier.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from ticket_verifier.domain.users.repositories import TokenIssuer


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenIssuer(TokenIssuer):
    """Issues HS256 JWTs carrying ``id``, ``username``, ``iat`` and ``exp``.

    Any holder of the signing secret can verify a token with a stock JWT
    library; :meth:`decode` does exactly that and is what an authorization
    layer would call.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        # JWT timestamps have second resolution
        issued_at = self._clock().replace(microsecond=0)
        claims = {
            "id": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        try:
            return SessionClaims(
                user_id=int(payload["id"]),
                username=str(payload["username"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
