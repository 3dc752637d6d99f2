"""
Shared fixtures: an initialized store on an in-memory SQLite database
and a TestClient for an application built around it.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.lego.store import CatalogStore
from app.main import create_app


def make_store() -> CatalogStore:
    # One shared connection so every session sees the same in-memory database.
    return CatalogStore(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def empty_store():
    """A store whose tables do not exist yet."""
    store = make_store()
    yield store
    store.close()


@pytest.fixture()
def store(empty_store):
    """A store with the seed themes and the seed set."""
    empty_store.initialize()
    return empty_store


@pytest.fixture()
def client():
    with TestClient(create_app(store=make_store())) as c:
        yield c
