# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from ticket_verifier.domain.users.entities import User
from ticket_verifier.domain.users.repositories import PasswordHasher, UserRepository
from ticket_verifier.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User:
        # uniqueness is left to the insert; a pre-check would race with concurrent registrations
        hashed = self._password_hasher.hash(password)
        user = self._users.add(username, hashed)
        logger.info(f"users.register: created user_id={user.id}")
        return user
