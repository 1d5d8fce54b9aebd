"""SQLAlchemy mapping metadata for the catalog model.

Python attributes are snake_case while the columns keep the camelCase names
the serving layer queries, so every column declares its attribute via ``key``.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, Text, orm
from sqlalchemy.orm import relationship

from algowiki.domain.model import (
    ALGORITHM_FIELDS,
    HYPOTHESIS_COLUMNS,
    REDUCTION_COLUMNS,
    Algorithm,
    GlossaryEntry,
    Hypothesis,
    Problem,
    Reduction,
    attribute_name,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

log = logging.getLogger(__name__)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _text_column(name: str, key: str | None = None) -> Column[str]:
    return Column(name, Text, key=key or attribute_name(name), nullable=False, default="")


# Catalog tables --------------------------------------------------------------

problem_table = Table(
    "problems",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    Column("domain", Text, key="domain"),
    Column("family", Text, key="family", nullable=False),
    Column("variation", Text, key="variation", nullable=False),
    Column("domainSlug", String, key="domain_slug", index=True),
    Column("familySlug", String, key="family_slug", index=True),
    Column("variationSlug", String, key="variation_slug", index=True),
    _text_column("description"),
    _text_column("alias"),
    _text_column("aliasSlug"),
    _text_column("descriptionReference"),
    _text_column("parameters"),
    _text_column("parameterForGraphs"),
    _text_column("inputSize"),
    _text_column("outputSize"),
    _text_column("bestKnownUpperBound"),
    _text_column("upperBoundReference"),
    _text_column("bestKnownLowerBound"),
    _text_column("lowerBoundReference"),
    _text_column("problemProperties"),
    _text_column("shortDescription"),
    _text_column("familyProperties"),
    _text_column("familyDescription"),
    _text_column("domainDescription"),
    Column("parentId", Integer, ForeignKey("problems.id"), key="parent_id"),
    Column("numberOfAlgorithms", Integer, key="number_of_algorithms"),
    Column("numberOfVariations", Integer, key="number_of_variations"),
    Column("numberOfFamilies", Integer, key="number_of_families"),
)

algorithm_table = Table(
    "algorithms",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    Column("problemId", Integer, ForeignKey("problems.id"), key="problem_id", nullable=False),
    *(_text_column(column) for column in ALGORITHM_FIELDS),
)

reduction_table = Table(
    "reductions",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    Column("fromProblemId", Integer, ForeignKey("problems.id"), key="from_problem_id"),
    Column("toProblemId", Integer, ForeignKey("problems.id"), key="to_problem_id"),
    *(_text_column(column, attr) for column, attr in REDUCTION_COLUMNS.items()),
)

hypothesis_table = Table(
    "hypothesis",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    Column("targetProblemId", Integer, ForeignKey("problems.id"), key="target_problem_id"),
    *(_text_column(column, attr) for column, attr in HYPOTHESIS_COLUMNS.items()),
)

glossary_table = Table(
    "glossary",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    _text_column("term"),
    _text_column("definition"),
    _text_column("category"),
)

meta_information_table = Table(
    "metaInformation",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True),
    Column("datetime", Text, nullable=False),
)

# Full-text index -------------------------------------------------------------

SEARCH_TABLE_NAME: Final[str] = "search_fts"
SEARCH_INDEXED_COLUMNS: Final[tuple[str, ...]] = ("domain", "family", "variation", "algorithm")
SEARCH_UNINDEXED_COLUMNS: Final[tuple[str, ...]] = (
    "domainSlug",
    "familySlug",
    "variationSlug",
    "numberOfAlgorithms",
    "numberOfVariations",
    "numberOfFamilies",
)

# FTS5 virtual tables are created with raw DDL; this Table only describes the
# columns for inserts and selects and lives outside the mapped metadata.
search_metadata = MetaData()
search_table = Table(
    SEARCH_TABLE_NAME,
    search_metadata,
    *(Column(name, Text, key=attribute_name(name)) for name in SEARCH_INDEXED_COLUMNS),
    *(Column(name, key=attribute_name(name)) for name in SEARCH_UNINDEXED_COLUMNS),
)


def _search_ddl() -> str:
    columns = [*SEARCH_INDEXED_COLUMNS, *(f"{name} UNINDEXED" for name in SEARCH_UNINDEXED_COLUMNS)]
    return f"CREATE VIRTUAL TABLE IF NOT EXISTS {SEARCH_TABLE_NAME} USING fts5({', '.join(columns)})"


def create_search_index(connection: Connection) -> None:
    connection.exec_driver_sql(_search_ddl())


def drop_search_index(connection: Connection) -> None:
    connection.exec_driver_sql(f"DROP TABLE IF EXISTS {SEARCH_TABLE_NAME}")


# Mappers ---------------------------------------------------------------------


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the catalog model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Problem,
        problem_table,
        properties={
            "parent": relationship(
                Problem,
                remote_side=[problem_table.c.id],
                foreign_keys=[problem_table.c.parent_id],
                post_update=True,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Algorithm,
        algorithm_table,
        properties={"problem": relationship(Problem)},
    )

    mapper_registry.map_imperatively(
        Reduction,
        reduction_table,
        properties={
            "source": relationship(Problem, foreign_keys=[reduction_table.c.from_problem_id]),
            "target": relationship(Problem, foreign_keys=[reduction_table.c.to_problem_id]),
        },
    )

    mapper_registry.map_imperatively(
        Hypothesis,
        hypothesis_table,
        properties={"target": relationship(Problem)},
    )

    mapper_registry.map_imperatively(GlossaryEntry, glossary_table)

    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create the catalog tables and the search index when they do not exist yet."""

    log.info("Creating all tables")
    with engine.begin() as connection:
        mapper_registry.metadata.create_all(connection)
        create_search_index(connection)


def reset_all_tables(connection: Connection) -> None:
    """Drop and recreate every table on ``connection``, inside its open transaction."""

    drop_search_index(connection)
    mapper_registry.metadata.drop_all(connection)
    mapper_registry.metadata.create_all(connection)
    create_search_index(connection)
