import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.api import auth, catalog, deps, expert, preferences, users
from app.api.errors import register_error_handlers
from app.database import Base
from app.services.tokens import TokenSigner

TEST_SECRET = os.environ["SECRET_KEY"]


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def signer():
    return TokenSigner(secret_key=TEST_SECRET)


@pytest.fixture
def api_app(session_factory, signer):
    app = FastAPI()
    register_error_handlers(app)
    for module in (auth, users, catalog, preferences, expert):
        app.include_router(module.router)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_token_signer] = lambda: signer
    return app


@pytest.fixture
def client(api_app):
    return TestClient(api_app)
