"""SQLAlchemy adapter package for algowiki."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .queries import SqlAlchemyCatalogReader
from .repositories import (
    SqlAlchemyAlgorithmRepository,
    SqlAlchemyCatalogSchema,
    SqlAlchemyGlossaryRepository,
    SqlAlchemyHypothesisRepository,
    SqlAlchemyMetaInformationRepository,
    SqlAlchemyProblemRepository,
    SqlAlchemyReductionRepository,
    SqlAlchemySearchIndexRepository,
)
from .unit_of_work import (
    SqlAlchemyCatalogReadUnitOfWork,
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAlgorithmRepository",
    "SqlAlchemyCatalogReadUnitOfWork",
    "SqlAlchemyCatalogReader",
    "SqlAlchemyCatalogSchema",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyGlossaryRepository",
    "SqlAlchemyHypothesisRepository",
    "SqlAlchemyMetaInformationRepository",
    "SqlAlchemyProblemRepository",
    "SqlAlchemyReductionRepository",
    "SqlAlchemySearchIndexRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "startup",
]
