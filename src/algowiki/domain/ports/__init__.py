"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import SourceFetcher, SourceFetchError
from .persistence import (
    AlgorithmRepository,
    CatalogSchema,
    GlossaryRepository,
    HypothesisRepository,
    MetaInformationRepository,
    ProblemRepository,
    ReductionRepository,
    Repository,
    SearchIndexRepository,
)
from .queries import (
    CatalogReader,
    CatalogStats,
    DomainDetail,
    DomainSummary,
    FamilySummary,
    ProblemRef,
    VariationDetail,
    VariationSummary,
)
from .reporting import MissingReference, MissingReferenceReporter, NullReporter, ReportKind
from .unit_of_work import (
    CatalogReadRepositories,
    CatalogReadUnitOfWork,
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AlgorithmRepository",
    "CatalogReadRepositories",
    "CatalogReadUnitOfWork",
    "CatalogReader",
    "CatalogRepositories",
    "CatalogSchema",
    "CatalogStats",
    "CatalogUnitOfWork",
    "DomainDetail",
    "DomainSummary",
    "FamilySummary",
    "GlossaryRepository",
    "HypothesisRepository",
    "MetaInformationRepository",
    "MissingReference",
    "MissingReferenceReporter",
    "NullReporter",
    "ProblemRef",
    "ProblemRepository",
    "ReductionRepository",
    "ReportKind",
    "Repository",
    "RepositoryCollection",
    "SearchIndexRepository",
    "SourceFetchError",
    "SourceFetcher",
    "UnitOfWork",
    "VariationDetail",
    "VariationSummary",
]
