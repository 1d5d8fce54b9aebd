"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from algowiki.adapters.reports import CsvReportWriter
from algowiki.adapters.sheets import SheetsFetcher
from algowiki.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogReadUnitOfWork,
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from algowiki.config import get_rebuild_config, get_storage_config
from algowiki.domain.rebuild import run_rebuild_cycle
from algowiki.domain.scheduling import RebuildScheduler
from algowiki.domain.search import group_search_hits

if TYPE_CHECKING:
    from collections.abc import Callable

    from algowiki.domain.model import Algorithm, Reduction
    from algowiki.domain.ports.fetching import SourceFetcher
    from algowiki.domain.ports.queries import (
        CatalogReader,
        CatalogStats,
        DomainDetail,
        DomainSummary,
        FamilySummary,
        VariationDetail,
        VariationSummary,
    )
    from algowiki.domain.ports.reporting import MissingReferenceReporter
    from algowiki.domain.ports.unit_of_work import CatalogReadUnitOfWork, CatalogUnitOfWork
    from algowiki.domain.rebuild import RebuildResult
    from algowiki.domain.search import SearchHit

    UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]
    ReadUnitOfWorkFactory = Callable[[], CatalogReadUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _default_reporter() -> MissingReferenceReporter:
    return CsvReportWriter(get_storage_config().reports_dir())


def rebuild_once(
    *,
    source: SourceFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reporter: MissingReferenceReporter | None = None,
) -> RebuildResult:
    """Fetch every sheet and rebuild the catalog once with the configured adapters."""

    _ensure_started()
    result = run_rebuild_cycle(
        source or SheetsFetcher(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyCatalogUnitOfWork,
        reporter=reporter or _default_reporter(),
    )
    log.info(f"Rebuild finished in state {result.state}")
    return result


def build_scheduler(
    *,
    interval_seconds: float | None = None,
    source: SourceFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reporter: MissingReferenceReporter | None = None,
) -> RebuildScheduler:
    """Scheduler repeating :func:`rebuild_once` with shared adapters."""

    _ensure_started()
    effective_source = source or SheetsFetcher()
    effective_uow = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork
    effective_reporter = reporter or _default_reporter()
    interval = interval_seconds or get_rebuild_config().interval_seconds

    def cycle() -> RebuildResult:
        return run_rebuild_cycle(
            effective_source,
            unit_of_work_factory=effective_uow,
            reporter=effective_reporter,
        )

    return RebuildScheduler(cycle, interval_seconds=interval)


def _read[T](
    query: Callable[[CatalogReader], T],
    unit_of_work_factory: ReadUnitOfWorkFactory | None,
) -> T:
    _ensure_started()
    with (unit_of_work_factory or SqlAlchemyCatalogReadUnitOfWork)() as uow:
        return query(uow.repositories.catalog)


def search_catalog(
    term: str,
    *,
    limit: int = 10,
    offset: int = 0,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> dict[str, list[SearchHit]]:
    hits = _read(
        lambda catalog: catalog.search(term, limit=limit, offset=offset), unit_of_work_factory
    )
    return group_search_hits(hits)


def catalog_status(
    *,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> tuple[str | None, CatalogStats]:
    """Timestamp of the last committed rebuild and the size of that catalog."""

    return _read(lambda catalog: (catalog.last_rebuilt(), catalog.stats()), unit_of_work_factory)


def list_domains(
    *,
    limit: int | None = None,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> list[DomainSummary]:
    return _read(lambda catalog: catalog.domains(limit=limit), unit_of_work_factory)


def domain_detail(
    slug: str,
    *,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> DomainDetail | None:
    return _read(lambda catalog: catalog.domain(slug), unit_of_work_factory)


def list_families(
    *,
    domain: str | None = None,
    limit: int | None = None,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> list[FamilySummary]:
    return _read(lambda catalog: catalog.families(domain=domain, limit=limit), unit_of_work_factory)


def list_variations(
    *,
    domain: str | None = None,
    family: str | None = None,
    limit: int | None = None,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> list[VariationSummary]:
    return _read(
        lambda catalog: catalog.variations(domain=domain, family=family, limit=limit),
        unit_of_work_factory,
    )


def variation_detail(
    slug: str,
    *,
    domain: str,
    family: str,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> VariationDetail | None:
    return _read(
        lambda catalog: catalog.variation(slug, domain=domain, family=family),
        unit_of_work_factory,
    )


def list_algorithms(
    *,
    domain: str | None = None,
    family: str | None = None,
    variation: str | None = None,
    limit: int | None = None,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> list[Algorithm]:
    """Algorithms (with their problem loaded) under the given domain/family/variation slugs."""

    return _read(
        lambda catalog: catalog.algorithms(
            domain=domain, family=family, variation=variation, limit=limit
        ),
        unit_of_work_factory,
    )


def list_reductions(
    *,
    domain: str | None = None,
    family: str | None = None,
    variation: str | None = None,
    limit: int | None = None,
    unit_of_work_factory: ReadUnitOfWorkFactory | None = None,
) -> list[Reduction]:
    """Reductions whose source problem sits under the given slugs."""

    return _read(
        lambda catalog: catalog.reductions(
            domain=domain, family=family, variation=variation, limit=limit
        ),
        unit_of_work_factory,
    )
