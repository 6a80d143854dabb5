# tests/conftest.py
from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ["GOOGLE_API_KEY"] = ""
os.environ["NEWS_API_KEY"] = ""

from mindwell.api.v1 import dependencies as deps
from mindwell.core.security import create_access_token
from mindwell.db.session import Base
from mindwell.db.session import get_db as app_get_session
from mindwell.main import app as fastapi_app
from mindwell.models import Letter
from mindwell.repositories.letter_repo import LetterRepository
from mindwell.services.generative import GenerationResult

TEST_DB_URL = "sqlite://"

TEST_UID = "uid-jane"
TEST_EMAIL = "jane.doe@example.com"
TEST_HANDLE = "jane.doe"


class FakeGenerator:
    """Scripted stand-in for the generative text client."""

    def __init__(
        self,
        text: str = "OK",
        *,
        enabled: bool = True,
        error: Exception | None = None,
        block_reason: str | None = None,
        finish_reason: str | None = None,
        delay: float = 0.0,
    ) -> None:
        self.text = text
        self.enabled = enabled
        self.error = error
        self.block_reason = block_reason
        self.finish_reason = finish_reason
        self.delay = delay
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return GenerationResult(
            text=self.text,
            block_reason=self.block_reason,
            finish_reason=self.finish_reason,
        )


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def generator() -> FakeGenerator:
    """Generator that approves everything unless a test reconfigures it."""
    return FakeGenerator()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    generator: FakeGenerator,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[deps.get_generative_client_dep] = lambda: generator
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    """Bearer headers for a signed-in user whose handle is ``jane.doe``."""
    token = create_access_token(TEST_UID, TEST_EMAIL)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_letter(db_session: Session) -> Callable[..., Letter]:
    """Factory that stores a letter directly, bypassing moderation."""
    repo = LetterRepository(db_session)

    def _make(content: str = "Dear stranger, today was hard.", **kwargs: Any) -> Letter:
        kwargs.setdefault("username", "writer")
        return repo.create(content=content, **kwargs)

    return _make
