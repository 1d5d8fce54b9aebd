"""Read-side port over the last committed catalog snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from algowiki.domain.model import Algorithm, GlossaryEntry, Problem, Reduction
    from algowiki.domain.search import SearchHit


@dataclass(frozen=True, slots=True)
class CatalogStats:
    domains: int
    families: int
    variations: int
    algorithms: int


@dataclass(frozen=True, slots=True)
class DomainSummary:
    domain: str | None
    domain_slug: str | None
    algorithms: int


@dataclass(frozen=True, slots=True)
class DomainDetail:
    """A domain as described by its first problem row, with the domain-wide counters."""

    domain: str | None
    domain_slug: str | None
    description: str
    families: int | None
    variations: int | None
    algorithms: int | None


@dataclass(frozen=True, slots=True)
class FamilySummary:
    domain: str | None
    domain_slug: str | None
    family: str
    family_slug: str | None
    algorithms: int


@dataclass(frozen=True, slots=True)
class VariationSummary:
    id: int
    domain: str | None
    domain_slug: str | None
    family: str
    family_slug: str | None
    variation: str
    variation_slug: str | None
    parent_id: int | None
    algorithms: int


@dataclass(frozen=True, slots=True)
class ProblemRef:
    """Just enough of a problem to link to it."""

    id: int
    domain_slug: str | None
    family_slug: str | None
    variation: str
    variation_slug: str | None


@dataclass(frozen=True, slots=True)
class VariationDetail:
    """A variation with its place in the hierarchy.

    ``related`` lists the other variations of the same family that are neither
    the parent nor a child.
    """

    problem: Problem
    parent: ProblemRef | None
    children: tuple[ProblemRef, ...]
    related: tuple[ProblemRef, ...]


@runtime_checkable
class CatalogReader(Protocol):
    def search(self, term: str, *, limit: int = 10, offset: int = 0) -> list[SearchHit]: ...

    def stats(self) -> CatalogStats: ...

    def last_rebuilt(self) -> str | None: ...

    def glossary(self) -> list[GlossaryEntry]: ...

    def domains(self, *, limit: int | None = None) -> list[DomainSummary]: ...

    def domain(self, slug: str) -> DomainDetail | None: ...

    def families(
        self, *, domain: str | None = None, limit: int | None = None
    ) -> list[FamilySummary]: ...

    def variations(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        limit: int | None = None,
    ) -> list[VariationSummary]: ...

    def variation(self, slug: str, *, domain: str, family: str) -> VariationDetail | None: ...

    def algorithms(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        variation: str | None = None,
        limit: int | None = None,
    ) -> list[Algorithm]: ...

    def reductions(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        variation: str | None = None,
        limit: int | None = None,
    ) -> list[Reduction]: ...


__all__ = [
    "CatalogReader",
    "CatalogStats",
    "DomainDetail",
    "DomainSummary",
    "FamilySummary",
    "ProblemRef",
    "VariationDetail",
    "VariationSummary",
]
