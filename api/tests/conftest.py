"""Common pytest fixtures for API tests.

Tests run against a throwaway SQLite file; the schema comes from
``SQLModel.metadata.create_all`` instead of the Alembic migrations, which
target Postgres.
"""

import os
import tempfile
from collections.abc import Iterator

# Point the engine at SQLite BEFORE importing the app
_DB_DIR = tempfile.mkdtemp(prefix="i18n-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_DB_DIR, 'i18n.db')}")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("KEY_SCHEMA", "hierarchical")

import pytest
from fastapi.testclient import TestClient
from i18n_manager_api.db import engine
from i18n_manager_api.main import app
from i18n_manager_api.store import TranslationStore, build_store
from sqlalchemy import delete
from sqlmodel import Session, SQLModel

from i18n_models import Language, MaterializedKey, MaterializedTranslation, Translation, TranslationKey

SQLModel.metadata.create_all(engine)


@pytest.fixture(scope="session")
def client() -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db() -> Iterator[None]:
    with Session(engine) as session:
        # Respect FKs: values first, then key nodes, then languages
        session.exec(delete(Translation))
        session.exec(delete(MaterializedTranslation))
        session.exec(delete(TranslationKey))
        session.exec(delete(MaterializedKey))
        session.exec(delete(Language))
        session.commit()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def session() -> Iterator[Session]:
    with Session(engine) as s:
        yield s


@pytest.fixture(params=["hierarchical", "materialized"])
def store(request, session: Session) -> TranslationStore:
    return build_store(session, request.param)


@pytest.fixture
def tree_store(session: Session) -> TranslationStore:
    return build_store(session, "hierarchical")
