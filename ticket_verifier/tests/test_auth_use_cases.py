from __future__ import annotations

import pytest

from ticket_verifier.application.services.token_issuer import JwtTokenIssuer
from ticket_verifier.application.use_cases.users.login_user import LoginUserUseCase
from ticket_verifier.application.use_cases.users.register_user import RegisterUserUseCase
from ticket_verifier.domain.users.entities import User
from ticket_verifier.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from ticket_verifier.domain.users.repositories import PasswordHasher, UserRepository

SECRET = "unit-test-signing-secret-of-sufficient-length"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def add(self, username: str, password_hash: str) -> User:
        if username in self._users:
            raise UserAlreadyExistsError()
        new_user = User(id=self._seq, username=username, password_hash=password_hash)
        self._seq += 1
        self._users[username] = new_user
        return new_user


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def register(users: InMemoryUserRepository) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())


@pytest.fixture()
def login(users: InMemoryUserRepository) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users,
        password_hasher=DeterministicHasher(),
        token_issuer=JwtTokenIssuer(SECRET),
    )


def test_register_user_stores_hash_not_plaintext(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    user = register.execute("alice", "secret123")

    assert user.id == 1
    stored = users.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash == "hashed:secret123"


def test_register_user_duplicate_raises(register: RegisterUserUseCase) -> None:
    register.execute("alice", "secret123")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice", "other")


def test_login_user_success_returns_signed_token(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("alice", "secret123")

    token = login.execute("alice", "secret123")

    claims = JwtTokenIssuer(SECRET).decode(token)
    assert claims.user_id == 1
    assert claims.username == "alice"


def test_login_user_invalid_credentials(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("alice", "secret123")

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice", "wrong")


def test_unknown_user_and_wrong_password_fail_identically(
    register: RegisterUserUseCase, login: LoginUserUseCase
) -> None:
    register.execute("alice", "secret123")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("mallory", "secret123")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status == 401


class RecordingHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.verified: list[tuple[str, str]] = []

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append((password, hashed))
        return super().verify(password, hashed)


def test_unknown_user_still_pays_for_a_hash_check(users: InMemoryUserRepository) -> None:
    hasher = RecordingHasher()
    RegisterUserUseCase(users=users, password_hasher=hasher).execute("alice", "secret123")
    login = LoginUserUseCase(
        users=users, password_hasher=hasher, token_issuer=JwtTokenIssuer(SECRET)
    )

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError):
        login.execute("mallory", "secret123")

    assert [password for password, _ in hasher.verified] == ["wrong", "secret123"]
    decoy = hasher.verified[1][1]
    assert decoy.startswith("hashed:")
    assert decoy != "hashed:secret123"
