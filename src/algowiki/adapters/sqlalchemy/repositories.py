"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from sqlalchemy import insert

from algowiki.adapters.sqlalchemy.mappings import (
    meta_information_table,
    reset_all_tables,
    search_table,
)
from algowiki.domain.model import Algorithm, GlossaryEntry, Hypothesis, Problem, Reduction

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy.orm import Session

    from algowiki.domain.search import SearchEntry

log = logging.getLogger(__name__)

META_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class SqlAlchemyRepository[TEntity]:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)


class SqlAlchemyProblemRepository(SqlAlchemyRepository[Problem]):
    pass


class SqlAlchemyAlgorithmRepository(SqlAlchemyRepository[Algorithm]):
    pass


class SqlAlchemyReductionRepository(SqlAlchemyRepository[Reduction]):
    pass


class SqlAlchemyHypothesisRepository(SqlAlchemyRepository[Hypothesis]):
    pass


class SqlAlchemyGlossaryRepository(SqlAlchemyRepository[GlossaryEntry]):
    pass


class SqlAlchemyCatalogSchema:
    def __init__(self, session: Session) -> None:
        self.session = session

    def reset(self) -> None:
        log.debug("Dropping and recreating catalog tables")
        reset_all_tables(self.session.connection())


class SqlAlchemyMetaInformationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def record(self, rebuilt_at: datetime) -> None:
        self.session.execute(
            insert(meta_information_table).values(datetime=rebuilt_at.strftime(META_DATETIME_FORMAT))
        )


class SqlAlchemySearchIndexRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def rebuild(self, entries: Sequence[SearchEntry]) -> None:
        connection = self.session.connection()
        connection.execute(search_table.delete())
        if not entries:
            return
        rows = [_search_row(entry) for entry in entries]
        # executemany keeps list order, so rowid follows tier order
        connection.execute(insert(search_table), rows)


def _search_row(entry: SearchEntry) -> dict[str, object]:
    row = asdict(entry)
    del row["tier"]
    return row
