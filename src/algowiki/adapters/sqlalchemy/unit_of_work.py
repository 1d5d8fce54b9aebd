"""SQLAlchemy-backed units of work for rebuilding and reading the catalog."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from algowiki.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from algowiki.adapters.sqlalchemy.queries import SqlAlchemyCatalogReader
from algowiki.adapters.sqlalchemy.repositories import (
    SqlAlchemyAlgorithmRepository,
    SqlAlchemyCatalogSchema,
    SqlAlchemyGlossaryRepository,
    SqlAlchemyHypothesisRepository,
    SqlAlchemyMetaInformationRepository,
    SqlAlchemyProblemRepository,
    SqlAlchemyReductionRepository,
    SqlAlchemySearchIndexRepository,
)
from algowiki.config.storage import get_database_config
from algowiki.domain.ports.unit_of_work import (
    CatalogReadRepositories,
    CatalogRepositories,
    RepositoryCollection,
)

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Connection, Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call algowiki.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


# pysqlite opens transactions lazily and commits before DDL; taking over BEGIN
# makes the drop/recreate/fill of a rebuild one transaction.
def _on_sqlite_connect(dbapi_connection: Any, connection_record: Any) -> None:
    _ = connection_record
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
    finally:
        cursor.close()


def _on_sqlite_begin(connection: Connection) -> None:
    connection.exec_driver_sql("BEGIN")


def configure_sqlite(engine: Engine) -> None:
    """Enable WAL journaling and transactional DDL on a SQLite engine."""

    if engine.dialect.name != "sqlite":
        return
    if not event.contains(engine, "connect", _on_sqlite_connect):
        event.listen(engine, "connect", _on_sqlite_connect)
    if not event.contains(engine, "begin", _on_sqlite_begin):
        event.listen(engine, "begin", _on_sqlite_begin)


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, mappers, tables, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    configure_sqlite(resolved_engine)
    start_mappers()
    create_all_tables(resolved_engine)

    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyCatalogUnitOfWork(BaseSqlAlchemyUnitOfWork[CatalogRepositories]):
    """Unit of work for a full catalog rebuild."""

    def _build_repositories(self, session: Session) -> CatalogRepositories:
        return CatalogRepositories(
            schema=SqlAlchemyCatalogSchema(session),
            problems=SqlAlchemyProblemRepository(session),
            algorithms=SqlAlchemyAlgorithmRepository(session),
            reductions=SqlAlchemyReductionRepository(session),
            hypotheses=SqlAlchemyHypothesisRepository(session),
            glossary=SqlAlchemyGlossaryRepository(session),
            meta=SqlAlchemyMetaInformationRepository(session),
            search_index=SqlAlchemySearchIndexRepository(session),
        )


class SqlAlchemyCatalogReadUnitOfWork(BaseSqlAlchemyUnitOfWork[CatalogReadRepositories]):
    """Read-only access to the last committed catalog."""

    def _build_repositories(self, session: Session) -> CatalogReadRepositories:
        return CatalogReadRepositories(catalog=SqlAlchemyCatalogReader(session))


if TYPE_CHECKING:
    from algowiki.domain.ports.unit_of_work import CatalogReadUnitOfWork, CatalogUnitOfWork

    _uow_catalog_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
    _uow_read_check: CatalogReadUnitOfWork = SqlAlchemyCatalogReadUnitOfWork()
