# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.config import Settings
from core.user_repository import UserRepository
from database import build_engine, build_session_factory, init_db
from main import create_app
from models.schemas import AuthCredentials
from models.user import User


PASSWORD = "Secret123!"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    # bcrypt's minimum cost keeps hashing fast in tests
    return Settings(
        jwt_secret_key="test-secret",
        database_url=f"sqlite:///{tmp_path / 'app.db'}",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture()
def db(settings: Settings) -> Session:
    engine = build_engine(settings.database_url)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def users(db: Session, settings: Settings) -> UserRepository:
    return UserRepository(db, bcrypt_rounds=settings.bcrypt_rounds)


@pytest.fixture()
def make_user(users: UserRepository):
    def _make(username: str = "alice", password: str = PASSWORD) -> User:
        users.signup(AuthCredentials(username=username, password=password))
        return users.find_by_username(username)
    return _make


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
    app.state.engine.dispose()


@pytest.fixture()
def auth_headers(client: TestClient):
    def _headers(username: str = "alice", password: str = PASSWORD) -> dict[str, str]:
        client.post("/auth/signup", json={"username": username, "password": password})
        response = client.post("/auth/signin", json={"username": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _headers
