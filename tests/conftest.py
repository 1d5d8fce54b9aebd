from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from algowiki.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogReadUnitOfWork,
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection so every session sees the same in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def started_engine(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def sqlite_session(started_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=started_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog_unit_of_work(
    started_engine: Engine,
) -> Callable[[], SqlAlchemyCatalogUnitOfWork]:
    _ = started_engine
    return SqlAlchemyCatalogUnitOfWork


@pytest.fixture
def read_unit_of_work(
    started_engine: Engine,
) -> Callable[[], SqlAlchemyCatalogReadUnitOfWork]:
    _ = started_engine
    return SqlAlchemyCatalogReadUnitOfWork
