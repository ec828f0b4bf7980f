"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ticket_verifier.application.services.password_hashing import BcryptPasswordHasher
from ticket_verifier.application.services.token_issuer import JwtTokenIssuer
from ticket_verifier.application.services.upload_policy import UploadPolicy
from ticket_verifier.application.use_cases.tickets.list_tickets import ListTicketsUseCase
from ticket_verifier.application.use_cases.tickets.submit_ticket import SubmitTicketUseCase
from ticket_verifier.application.use_cases.users.login_user import LoginUserUseCase
from ticket_verifier.application.use_cases.users.register_user import RegisterUserUseCase
from ticket_verifier.infrastructure.db import (
    ENGINE,
    SessionLocal,
    build_session_factory,
    engine_of,
)
from ticket_verifier.infrastructure.health import DatabaseProbe
from ticket_verifier.infrastructure.repositories.tickets.sqlalchemy_ticket_repository import (
    SqlAlchemyTicketRepository,
)
from ticket_verifier.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from ticket_verifier.infrastructure.storage import LocalUploadStore
from ticket_verifier.interfaces.http.controllers.auth_controller import AuthController
from ticket_verifier.interfaces.http.controllers.misc_controller import MiscController
from ticket_verifier.interfaces.http.controllers.tickets_controller import TicketsController
from ticket_verifier.interfaces.http.controllers.uploads_controller import UploadsController
from ticket_verifier.shared.config import AppConfig, load_config


class Container:
    """Wires the object graph.

    Pass ``engine`` to run on another database; a ``session_factory`` alone
    implies the engine it is bound to. Both default to the configured database.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        session_factory: Callable[[], Session] | None = None,
        engine: Engine | None = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory
        self._engine = engine

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def engine(self) -> Engine:
        if self._engine is not None:
            return self._engine
        if self._session_factory is not None:
            return engine_of(self._session_factory)
        return ENGINE

    @cached_property
    def session_factory(self) -> Callable[[], Session]:
        if self._session_factory is not None:
            return self._session_factory
        if self._engine is not None:
            return build_session_factory(self._engine)
        return SessionLocal

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.hashing.bcrypt_rounds)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(
            self.config.secret_key,
            algorithm=self.config.token.algorithm,
            ttl=timedelta(seconds=self.config.token.ttl_seconds),
        )

    @cached_property
    def upload_policy(self) -> UploadPolicy:
        return UploadPolicy(max_bytes=self.config.upload.max_bytes)

    @cached_property
    def upload_store(self) -> LocalUploadStore:
        return LocalUploadStore(
            self.config.upload.directory,
            chunk_size=self.config.upload.chunk_size,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def ticket_repository(self) -> SqlAlchemyTicketRepository:
        return SqlAlchemyTicketRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            token_issuer=self.token_issuer,
        )

    @cached_property
    def submit_ticket_use_case(self) -> SubmitTicketUseCase:
        return SubmitTicketUseCase(
            tickets=self.ticket_repository,
            uploads=self.upload_store,
            policy=self.upload_policy,
        )

    @cached_property
    def list_tickets_use_case(self) -> ListTicketsUseCase:
        return ListTicketsUseCase(tickets=self.ticket_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def tickets_controller(self) -> TicketsController:
        return TicketsController(
            submit_use_case=self.submit_ticket_use_case,
            list_use_case=self.list_tickets_use_case,
        )

    @cached_property
    def uploads_controller(self) -> UploadsController:
        return UploadsController(store=self.upload_store)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database_probe=DatabaseProbe(self.engine))


container = Container()
