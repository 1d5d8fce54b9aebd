"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from algowiki.domain.ports.persistence import (
        AlgorithmRepository,
        CatalogSchema,
        GlossaryRepository,
        HypothesisRepository,
        MetaInformationRepository,
        ProblemRepository,
        ReductionRepository,
        SearchIndexRepository,
    )
    from algowiki.domain.ports.queries import CatalogReader


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Everything a rebuild writes to, all bound to the same transaction."""

    schema: CatalogSchema
    problems: ProblemRepository
    algorithms: AlgorithmRepository
    reductions: ReductionRepository
    hypotheses: HypothesisRepository
    glossary: GlossaryRepository
    meta: MetaInformationRepository
    search_index: SearchIndexRepository


@dataclass(slots=True)
class CatalogReadRepositories(RepositoryCollection):
    catalog: CatalogReader


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
type CatalogReadUnitOfWork = UnitOfWork[CatalogReadRepositories]
