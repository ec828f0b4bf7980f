# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from ticket_verifier.domain.users.exceptions import InvalidCredentialsError
from ticket_verifier.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from ticket_verifier.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        # verified against for unknown usernames so both failures cost one hash check
        self._decoy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, username: str, password: str) -> str:
        user = self._users.find_by_username(username)
        if user is None:
            self._password_hasher.verify(password, self._decoy_hash)
            logger.info("users.login: rejected credentials")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info("users.login: rejected credentials")
            raise InvalidCredentialsError()

        return self._token_issuer.issue(user.id, user.username)
