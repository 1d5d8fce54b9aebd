from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, text

from algowiki.adapters.reports import CsvReportWriter
from algowiki.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from algowiki.domain.ports.fetching import SourceFetchError
from algowiki.domain.ports.reporting import NullReporter, ReportKind
from algowiki.domain.rebuild import RebuildState, run_rebuild_cycle
from algowiki.domain.sources import SourceTables
from tests.helpers.sources import sample_tables

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from algowiki.domain.ports.reporting import MissingReference
    from algowiki.domain.rebuild import RebuildResult

SNAPSHOT_QUERIES = {
    "problems": (
        'SELECT domain, family, variation, "domainSlug", "familySlug", "variationSlug", '
        '"aliasSlug", "domainDescription", "numberOfAlgorithms", "numberOfVariations", '
        '"numberOfFamilies" FROM problems ORDER BY family, variation'
    ),
    "algorithms": (
        'SELECT problems.variation, algorithms.name, algorithms.parallel FROM algorithms '
        'JOIN problems ON problems.id = algorithms."problemId" ORDER BY 1, 2'
    ),
    "reductions": 'SELECT "reductionId", type FROM reductions ORDER BY 1',
    "hypothesis": "SELECT name FROM hypothesis ORDER BY 1",
    "glossary": "SELECT term, definition FROM glossary ORDER BY 1",
    "search": (
        'SELECT domain, family, variation, algorithm, "numberOfAlgorithms" '
        "FROM search_fts ORDER BY rowid"
    ),
}


def _clock_at(minute: int):  # noqa: ANN202
    return lambda: datetime(2024, 5, 1, 12, minute, tzinfo=UTC)


def _snapshot(engine: Engine) -> dict[str, list[tuple[object, ...]]]:
    with engine.connect() as connection:
        return {
            name: [tuple(row) for row in connection.execute(text(query))]
            for name, query in SNAPSHOT_QUERIES.items()
        }


def _meta(engine: Engine) -> list[str]:
    with engine.connect() as connection:
        return list(connection.execute(text('SELECT datetime FROM "metaInformation"')).scalars())


@pytest.fixture
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'algowiki.db'}",
        connect_args={"check_same_thread": False},
    )
    shutdown()
    startup(engine=engine, force=True)
    try:
        yield engine
    finally:
        shutdown()


def test_rebuild_twice_yields_identical_catalog(file_engine: Engine, tmp_path: Path) -> None:
    reporter = CsvReportWriter(tmp_path / "reports")

    first = run_rebuild_cycle(
        sample_tables,
        unit_of_work_factory=SqlAlchemyCatalogUnitOfWork,
        reporter=reporter,
        clock=_clock_at(0),
    )
    snapshot = _snapshot(file_engine)
    second = run_rebuild_cycle(
        sample_tables,
        unit_of_work_factory=SqlAlchemyCatalogUnitOfWork,
        reporter=reporter,
        clock=_clock_at(1),
    )

    assert first.state is second.state is RebuildState.COMMITTED
    assert _snapshot(file_engine) == snapshot
    # metaInformation is recreated, so only the latest timestamp remains
    assert _meta(file_engine) == ["2024-05-01 12:01:00"]
    assert len(snapshot["search"]) == 14
    assert ("Comparison Sorting", "Bitonic sort", "1") in snapshot["algorithms"]
    assert (tmp_path / "reports" / "reportAlgorithmsNotFound.csv").exists()
    assert (tmp_path / "reports" / "reportReductionsNotFound.csv").exists()


def test_fetch_failure_keeps_previous_snapshot(file_engine: Engine) -> None:
    run_rebuild_cycle(
        sample_tables, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, clock=_clock_at(0)
    )
    before = _snapshot(file_engine)

    def offline() -> SourceTables:
        raise SourceFetchError("sheets unavailable")

    result = run_rebuild_cycle(
        offline, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, clock=_clock_at(5)
    )

    assert result.state is RebuildState.FAILED
    assert _snapshot(file_engine) == before
    assert _meta(file_engine) == ["2024-05-01 12:00:00"]


class _FailsWhenStamping:
    """Clock that fails on its second call, when the rebuild stamps metaInformation."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        if self.calls == 2:
            raise RuntimeError("clock stopped")
        return datetime(2024, 5, 1, 13, 0, tzinfo=UTC)


def test_failure_mid_rebuild_rolls_back_the_drop(file_engine: Engine) -> None:
    run_rebuild_cycle(
        sample_tables, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, clock=_clock_at(0)
    )
    before = _snapshot(file_engine)

    result = run_rebuild_cycle(
        sample_tables,
        unit_of_work_factory=SqlAlchemyCatalogUnitOfWork,
        clock=_FailsWhenStamping(),
    )

    assert result.state is RebuildState.FAILED
    assert isinstance(result.error, RuntimeError)
    assert _snapshot(file_engine) == before
    assert _meta(file_engine) == ["2024-05-01 12:00:00"]


class _BlockingReporter(NullReporter):
    """Holds the rebuild inside its transaction while it reports missing algorithms."""

    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()

    def publish(self, kind: ReportKind, entries: Sequence[MissingReference]) -> None:
        if kind is ReportKind.ALGORITHMS:
            self.entered.set()
            self.release.wait(timeout=5)


def test_readers_see_previous_snapshot_during_rebuild(file_engine: Engine, tmp_path: Path) -> None:
    run_rebuild_cycle(
        sample_tables, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, clock=_clock_at(0)
    )
    reporter = _BlockingReporter()
    results: list[RebuildResult] = []
    worker = threading.Thread(
        target=lambda: results.append(
            run_rebuild_cycle(
                sample_tables,
                unit_of_work_factory=SqlAlchemyCatalogUnitOfWork,
                reporter=reporter,
                clock=_clock_at(1),
            )
        )
    )
    worker.start()
    reader = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'algowiki.db'}", connect_args={"timeout": 1}
    )
    try:
        assert reporter.entered.wait(timeout=5)
        with reader.connect() as connection:
            problems = connection.execute(text("SELECT count(*) FROM problems")).scalar_one()
            journal_mode = connection.execute(text("PRAGMA journal_mode")).scalar_one()
            stamped = list(
                connection.execute(text('SELECT datetime FROM "metaInformation"')).scalars()
            )
    finally:
        reporter.release.set()
        worker.join(timeout=10)
        reader.dispose()

    assert problems == 4
    assert journal_mode == "wal"
    assert stamped == ["2024-05-01 12:00:00"]
    assert [result.state for result in results] == [RebuildState.COMMITTED]
    assert _meta(file_engine) == ["2024-05-01 12:01:00"]
