import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-stickerdiary-tests")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stickerdiary.database import Base, create_tables, get_db
from stickerdiary.main import app
from stickerdiary.user import service as user_service
from stickerdiary.user.schemas import SignUpRequest


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return user_service.sign_up(
        db, SignUpRequest(email="alice@example.com", password="password1!", nickname="alice")
    )


@pytest.fixture
def other_user(db):
    return user_service.sign_up(
        db, SignUpRequest(email="bob@example.com", password="password2!", nickname="bob")
    )


@pytest.fixture
def signup_and_login(client):
    def _signup_and_login(email="alice@example.com", password="password1!", nickname="alice"):
        client.post("/auth/signup", json={"email": email, "password": password, "nickname": nickname})
        response = client.post("/auth/login", json={"email": email, "password": password})
        return response.json()

    return _signup_and_login


@pytest.fixture
def auth_headers(signup_and_login):
    tokens = signup_and_login()
    return {"Authorization": f"Bearer {tokens['access_token']}"}
