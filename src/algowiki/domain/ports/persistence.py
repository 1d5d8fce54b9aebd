"""Ports for persisting the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from algowiki.domain.model import Algorithm, GlossaryEntry, Hypothesis, Problem, Reduction

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from algowiki.domain.search import SearchEntry


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ProblemRepository(Repository[Problem], Protocol):
    """Repository contract for problems."""


@runtime_checkable
class AlgorithmRepository(Repository[Algorithm], Protocol):
    """Repository contract for algorithms."""


@runtime_checkable
class ReductionRepository(Repository[Reduction], Protocol):
    """Repository contract for reductions."""


@runtime_checkable
class HypothesisRepository(Repository[Hypothesis], Protocol):
    """Repository contract for hypotheses."""


@runtime_checkable
class GlossaryRepository(Repository[GlossaryEntry], Protocol):
    """Repository contract for glossary entries."""


@runtime_checkable
class CatalogSchema(Protocol):
    """Drops and recreates every catalog table inside the current transaction."""

    def reset(self) -> None: ...


@runtime_checkable
class MetaInformationRepository(Protocol):
    def record(self, rebuilt_at: datetime) -> None: ...


@runtime_checkable
class SearchIndexRepository(Protocol):
    """Replaces the full-text index with the given entries, preserving order."""

    def rebuild(self, entries: Sequence[SearchEntry]) -> None: ...
