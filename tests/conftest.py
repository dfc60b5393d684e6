# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

import app as taskflow
import tasks_db

from .fakes import FakeCursor, FakePool, InMemoryTaskStore

# Monday 2026-10-19
TODAY = date(2026, 10, 19)


@pytest.fixture()
def store(monkeypatch) -> InMemoryTaskStore:
    """Route every tasks_db query the app makes to an in-memory store."""
    fake = InMemoryTaskStore()
    for name in ("ping", "list_tasks", "get_task", "create_task", "update_task", "delete_task"):
        monkeypatch.setattr(tasks_db, name, getattr(fake, name))
    return fake


@pytest.fixture()
def client(store):
    taskflow.app.config["TESTING"] = True
    return taskflow.app.test_client()


@pytest.fixture()
def fake_pool(monkeypatch):
    """Install a FakePool; call it with the cursor the test wants."""

    def install(cursor: FakeCursor) -> FakePool:
        pool = FakePool(cursor)
        monkeypatch.setattr(tasks_db, "db_pool", pool)
        return pool

    return install
