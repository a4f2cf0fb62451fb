# tests/test_user_repository.py

from types import SimpleNamespace
from unittest import mock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from core import security
from core.errors import ConflictError, InternalError
from core.user_repository import UserRepository
from models.schemas import AuthCredentials
from models.user import User


CREDENTIALS = AuthCredentials(username="TestUsername", password="TestPassword1")


def _failing_session(error: Exception) -> mock.MagicMock:
    session = mock.MagicMock()
    session.commit.side_effect = error
    return session


# -------------------------------
# signup
# -------------------------------

def test_signup_then_validate_returns_username(users: UserRepository) -> None:
    users.signup(CREDENTIALS)

    assert users.validate_user_password(CREDENTIALS) == "TestUsername"


def test_signup_stores_salted_hash(users: UserRepository) -> None:
    users.signup(CREDENTIALS)
    user = users.find_by_username("TestUsername")

    assert user.password != CREDENTIALS.password
    assert user.password == security.hash_password(CREDENTIALS.password, user.salt)


def test_signup_duplicate_username_raises_conflict(users: UserRepository) -> None:
    users.signup(CREDENTIALS)

    with pytest.raises(ConflictError):
        users.signup(CREDENTIALS)


def test_signup_unique_violation_code_raises_conflict() -> None:
    error = IntegrityError("INSERT INTO users", {}, SimpleNamespace(pgcode="23505"))
    session = _failing_session(error)

    with pytest.raises(ConflictError):
        UserRepository(session, bcrypt_rounds=4).signup(CREDENTIALS)
    session.rollback.assert_called_once()


def test_signup_other_integrity_error_raises_internal() -> None:
    error = IntegrityError("INSERT INTO users", {}, SimpleNamespace(pgcode="unhandled"))

    with pytest.raises(InternalError):
        UserRepository(_failing_session(error), bcrypt_rounds=4).signup(CREDENTIALS)


def test_signup_store_failure_raises_internal() -> None:
    error = OperationalError("INSERT INTO users", {}, Exception("database is locked"))

    with pytest.raises(InternalError):
        UserRepository(_failing_session(error), bcrypt_rounds=4).signup(CREDENTIALS)


# -------------------------------
# validate_user_password
# -------------------------------

def test_validate_returns_none_for_unknown_user(users: UserRepository) -> None:
    with mock.patch.object(security, "verify_password") as verify:
        result = users.validate_user_password(CREDENTIALS)

    verify.assert_not_called()
    assert result is None


def test_validate_returns_none_for_wrong_password(users: UserRepository) -> None:
    users.signup(CREDENTIALS)
    wrong = AuthCredentials(username="TestUsername", password="WrongPassword1")

    assert users.validate_user_password(wrong) is None


def test_validate_checks_stored_hash_and_salt() -> None:
    user = User(username="TestUserName", password="stored-hash", salt="stored-salt")
    repo = UserRepository(mock.MagicMock())

    with mock.patch.object(repo, "find_by_username", return_value=user), \
            mock.patch.object(security, "verify_password", return_value=True) as verify:
        result = repo.validate_user_password(CREDENTIALS)

    verify.assert_called_once_with(CREDENTIALS.password, "stored-hash", "stored-salt")
    assert result == "TestUserName"


# -------------------------------
# hash_password
# -------------------------------

def test_hash_password_returns_hasher_output(users: UserRepository) -> None:
    with mock.patch.object(security.bcrypt, "hashpw", return_value=b"testhash") as hashpw:
        hashpw.assert_not_called()
        result = users.hash_password("testPassword", "testSalt")

    hashpw.assert_called_once_with(b"testPassword", b"testSalt")
    assert result == "testhash"
