from __future__ import annotations

from datetime import UTC, datetime

import pytest

from algowiki.domain.ports.fetching import SourceFetchError
from algowiki.domain.ports.reporting import MissingReference, ReportKind
from algowiki.domain.rebuild import RebuildState, rebuild_catalog, run_rebuild_cycle
from algowiki.domain.search import SearchTier
from algowiki.domain.sources import SourceTables
from tests.helpers.fakes import (
    FakeCatalogUnitOfWork,
    FakeMetaInformation,
    FakeRepository,
    FakeSchema,
    FakeSearchIndex,
    RecordingReporter,
)
from tests.helpers.sources import sample_tables

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _clock() -> datetime:
    return NOW


def test_rebuild_catalog_runs_every_step_and_commits() -> None:
    uow = FakeCatalogUnitOfWork()
    reporter = RecordingReporter()

    counters = rebuild_catalog(
        sample_tables(),
        unit_of_work_factory=lambda: uow,
        reporter=reporter,
        clock=_clock,
    )

    repositories = uow.repositories
    assert isinstance(repositories.schema, FakeSchema)
    assert repositories.schema.resets == 1
    assert uow.committed
    assert not uow.rolled_back

    assert counters.problems == 3
    assert counters.placeholders == 1
    assert counters.domains_filled == 2
    assert counters.parents_linked == 1
    assert counters.algorithms == 4
    assert counters.algorithms_not_found == 2
    assert counters.reductions == 1
    assert counters.hypotheses == 1
    assert counters.hypotheses_dropped == 1
    assert counters.glossary == 1
    assert counters.search_entries == 14

    assert isinstance(repositories.problems, FakeRepository)
    problems = {problem.variation: problem for problem in repositories.problems.items}
    apsp = problems["All-Pairs Shortest Path"]
    assert apsp.domain == "Graphs"
    assert apsp.parent is problems["Single-Source Shortest Path"]
    assert problems["Min-Plus Product"].domain == "Others"
    assert (apsp.number_of_families, apsp.number_of_variations, apsp.number_of_algorithms) == (
        1,
        2,
        3,
    )

    assert isinstance(repositories.meta, FakeMetaInformation)
    assert repositories.meta.recorded == [NOW]

    assert isinstance(repositories.search_index, FakeSearchIndex)
    tiers = [entry.tier for entry in repositories.search_index.entries]
    assert tiers.count(SearchTier.DOMAIN) == 3
    assert tiers.count(SearchTier.FAMILY) == 3
    assert tiers.count(SearchTier.VARIATION) == 4
    assert tiers.count(SearchTier.ALGORITHM) == 4

    assert reporter.published[ReportKind.REDUCTIONS] == [
        MissingReference("Matrix Products", "Min-Plus Product", "R1")
    ]
    assert reporter.published[ReportKind.ALGORITHMS] == [
        MissingReference("Sorting", "Sorting", "Merge sort"),
        MissingReference("Shortest Path", "Unknown Variant", "Lost algorithm"),
    ]


def test_rebuild_catalog_rolls_back_on_failure() -> None:
    uow = FakeCatalogUnitOfWork()

    class ExplodingIndex(FakeSearchIndex):
        def rebuild(self, entries: object) -> None:
            raise RuntimeError("disk full")

    uow.repositories.search_index = ExplodingIndex()

    with pytest.raises(RuntimeError, match="disk full"):
        rebuild_catalog(sample_tables(), unit_of_work_factory=lambda: uow, clock=_clock)

    assert uow.rolled_back
    assert not uow.committed


def test_run_rebuild_cycle_commits() -> None:
    uow = FakeCatalogUnitOfWork()

    result = run_rebuild_cycle(sample_tables, unit_of_work_factory=lambda: uow, clock=_clock)

    assert result.state is RebuildState.COMMITTED
    assert result.succeeded
    assert result.error is None
    assert result.started_at == NOW
    assert result.finished_at == NOW
    assert result.counters.algorithms == 4


def test_fetch_failure_never_opens_a_unit_of_work() -> None:
    uow = FakeCatalogUnitOfWork()

    def failing_fetcher() -> SourceTables:
        raise SourceFetchError("sheets unavailable")

    result = run_rebuild_cycle(failing_fetcher, unit_of_work_factory=lambda: uow, clock=_clock)

    assert result.state is RebuildState.FAILED
    assert isinstance(result.error, SourceFetchError)
    assert uow.entered == 0


def test_write_failure_reports_failed_state() -> None:
    uow = FakeCatalogUnitOfWork()

    class BrokenSchema(FakeSchema):
        def reset(self) -> None:
            raise RuntimeError("locked")

    uow.repositories.schema = BrokenSchema()

    result = run_rebuild_cycle(sample_tables, unit_of_work_factory=lambda: uow, clock=_clock)

    assert result.state is RebuildState.FAILED
    assert str(result.error) == "locked"
    assert uow.rolled_back


def test_rebuild_of_empty_sources_still_commits() -> None:
    uow = FakeCatalogUnitOfWork()

    counters = rebuild_catalog(SourceTables(), unit_of_work_factory=lambda: uow, clock=_clock)

    assert uow.committed
    assert counters.problems == 0
    assert counters.search_entries == 0
