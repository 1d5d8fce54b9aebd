"""One atomic rebuild of the catalog from freshly fetched source tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from algowiki.domain.aggregation import recompute_counters
from algowiki.domain.ingest import (
    RebuildContext,
    RebuildCounters,
    ingest_algorithms,
    ingest_glossary,
    ingest_hypotheses,
    ingest_problems,
    ingest_reductions,
)
from algowiki.domain.ports.reporting import NullReporter
from algowiki.domain.reconciliation import fill_missing_domains, link_parents
from algowiki.domain.search import build_search_entries

if TYPE_CHECKING:
    from collections.abc import Callable

    from algowiki.domain.ports.fetching import SourceFetcher
    from algowiki.domain.ports.reporting import MissingReferenceReporter
    from algowiki.domain.ports.unit_of_work import CatalogUnitOfWork
    from algowiki.domain.sources import SourceTables

log = logging.getLogger(__name__)

type Clock = Callable[[], datetime]
type CatalogUnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


class RebuildState(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"
    REBUILDING = "rebuilding"
    COMMITTED = "committed"
    FAILED = "failed"


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class RebuildResult:
    state: RebuildState = RebuildState.IDLE
    started_at: datetime | None = None
    finished_at: datetime | None = None
    counters: RebuildCounters = field(default_factory=RebuildCounters)
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is RebuildState.COMMITTED


def rebuild_catalog(
    tables: SourceTables,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    reporter: MissingReferenceReporter | None = None,
    clock: Clock = utc_now,
) -> RebuildCounters:
    """Replace the whole catalog inside a single transaction.

    The step order matters: reductions may add placeholder problems, which
    then take part in domain filling, parent lookup and algorithm resolution.
    """

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        context = RebuildContext(repositories=repositories, reporter=reporter or NullReporter())

        repositories.schema.reset()
        ingest_problems(tables, context)
        ingest_reductions(tables.reductions, context)
        context.counters.domains_filled = fill_missing_domains(context.problems.problems)
        context.counters.parents_linked = link_parents(tables.problems, context.problems)
        ingest_algorithms(tables, context)
        ingest_hypotheses(tables.hypotheses, context)

        problems = context.problems.problems
        totals = recompute_counters(problems, context.algorithms)
        ingest_glossary(tables.glossary, context)
        repositories.meta.record(clock())

        entries = build_search_entries(problems, context.algorithms, totals)
        repositories.search_index.rebuild(entries)
        context.counters.search_entries = len(entries)

        uow.commit()
    return context.counters


def run_rebuild_cycle(
    fetcher: SourceFetcher,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
    reporter: MissingReferenceReporter | None = None,
    clock: Clock = utc_now,
) -> RebuildResult:
    """Fetch, then rebuild; never raises for ordinary failures, reports them in the result."""

    result = RebuildResult(started_at=clock())

    result.state = RebuildState.FETCHING
    log.info("Fetching catalog sources")
    try:
        tables = fetcher()
    except Exception as exc:
        log.exception("Fetching catalog sources failed; keeping the previous catalog")
        return _finish(result, RebuildState.FAILED, clock, error=exc)

    result.state = RebuildState.REBUILDING
    log.info("Rebuilding catalog")
    try:
        result.counters = rebuild_catalog(
            tables,
            unit_of_work_factory=unit_of_work_factory,
            reporter=reporter,
            clock=clock,
        )
    except Exception as exc:
        log.exception("Catalog rebuild failed and was rolled back")
        return _finish(result, RebuildState.FAILED, clock, error=exc)

    counters = result.counters
    log.info(
        "Catalog rebuilt: %d problems (%d placeholders), %d algorithms, %d reductions, "
        "%d hypotheses, %d glossary terms, %d search entries",
        counters.problems,
        counters.placeholders,
        counters.algorithms,
        counters.reductions,
        counters.hypotheses,
        counters.glossary,
        counters.search_entries,
    )
    return _finish(result, RebuildState.COMMITTED, clock)


def _finish(
    result: RebuildResult,
    state: RebuildState,
    clock: Clock,
    *,
    error: BaseException | None = None,
) -> RebuildResult:
    result.state = state
    result.error = error
    result.finished_at = clock()
    return result
