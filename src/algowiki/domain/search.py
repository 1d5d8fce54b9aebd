"""Multi-tier search entries derived from the final in-memory catalog.

Entries are written in tier order (domains, families, variations, algorithms)
so that insertion order, which breaks relevance ties on read, favours the
coarser levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from algowiki.domain.aggregation import CatalogTotals
    from algowiki.domain.model import Algorithm, Problem


class SearchTier(StrEnum):
    DOMAIN = "domain"
    FAMILY = "family"
    VARIATION = "variation"
    ALGORITHM = "algorithm"


# grouped result keys, finest level first
HIT_GROUPS: dict[SearchTier | None, str] = {
    SearchTier.ALGORITHM: "algorithms",
    SearchTier.VARIATION: "variations",
    SearchTier.FAMILY: "families",
    SearchTier.DOMAIN: "domains",
    None: "others",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchEntry:
    """One row of the full-text index; fields outside the tier stay ``None``."""

    tier: SearchTier
    domain: str | None = None
    family: str | None = None
    variation: str | None = None
    algorithm: str | None = None
    domain_slug: str | None = None
    family_slug: str | None = None
    variation_slug: str | None = None
    number_of_algorithms: int | None = None
    number_of_variations: int | None = None
    number_of_families: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchHit:
    """A matched index row as read back from the store."""

    rowid: int
    rank: float
    domain: str | None = None
    family: str | None = None
    variation: str | None = None
    algorithm: str | None = None
    domain_slug: str | None = None
    family_slug: str | None = None
    variation_slug: str | None = None
    number_of_algorithms: int | None = None
    number_of_variations: int | None = None
    number_of_families: int | None = None

    @property
    def level(self) -> SearchTier | None:
        """Taxonomy level inferred from which name fields are filled."""

        if self.algorithm:
            return SearchTier.ALGORITHM
        if self.variation:
            return SearchTier.VARIATION
        if self.family:
            return SearchTier.FAMILY
        if self.domain:
            return SearchTier.DOMAIN
        return None


def build_search_entries(
    problems: Sequence[Problem],
    algorithms: Iterable[Algorithm],
    totals: CatalogTotals,
) -> list[SearchEntry]:
    domains: dict[str, SearchEntry] = {}
    families: dict[tuple[str, str], SearchEntry] = {}
    variations: dict[tuple[str, str, str], SearchEntry] = {}

    # algorithms per variation key; one key can span several problems
    variation_algorithms: dict[tuple[str, str, str], int] = {}
    for problem in problems:
        key = (problem.domain_slug, problem.family_slug, problem.variation_slug)
        variation_algorithms[key] = (
            variation_algorithms.get(key, 0) + totals.for_problem(problem).algorithms
        )

    for problem in problems:
        if problem.domain_slug not in domains:
            domain_totals = totals.by_domain.get(problem.domain_slug)
            domains[problem.domain_slug] = SearchEntry(
                tier=SearchTier.DOMAIN,
                domain=problem.domain,
                domain_slug=problem.domain_slug,
                number_of_families=domain_totals.families if domain_totals else None,
                number_of_variations=domain_totals.variations if domain_totals else None,
                number_of_algorithms=domain_totals.algorithms if domain_totals else None,
            )

        family_key = (problem.domain_slug, problem.family_slug)
        if family_key not in families:
            family_totals = totals.by_family.get(problem.family_slug)
            families[family_key] = SearchEntry(
                tier=SearchTier.FAMILY,
                domain=problem.domain,
                family=problem.family,
                domain_slug=problem.domain_slug,
                family_slug=problem.family_slug,
                number_of_variations=family_totals.variations if family_totals else None,
                number_of_algorithms=family_totals.algorithms if family_totals else None,
            )

        variation_key = (*family_key, problem.variation_slug)
        if variation_key not in variations:
            variations[variation_key] = SearchEntry(
                tier=SearchTier.VARIATION,
                domain=problem.domain,
                family=problem.family,
                variation=problem.variation,
                domain_slug=problem.domain_slug,
                family_slug=problem.family_slug,
                variation_slug=problem.variation_slug,
                number_of_algorithms=variation_algorithms[variation_key],
            )

    algorithm_entries = [
        SearchEntry(
            tier=SearchTier.ALGORITHM,
            domain=algorithm.problem.domain,
            family=algorithm.problem.family,
            variation=algorithm.problem.variation,
            algorithm=algorithm.name,
            domain_slug=algorithm.problem.domain_slug,
            family_slug=algorithm.problem.family_slug,
            variation_slug=algorithm.problem.variation_slug,
        )
        for algorithm in algorithms
    ]

    return [*domains.values(), *families.values(), *variations.values(), *algorithm_entries]


def prefix_query(term: str | None) -> str | None:
    """FTS5 query matching any token starting with ``term``; ``None`` for a blank term."""

    if term is None or not term.strip():
        return None
    quoted = term.strip().replace('"', '""')
    return f'"{quoted}"*'


def group_search_hits(hits: Iterable[SearchHit]) -> dict[str, list[SearchHit]]:
    """Bucket hits by level, keeping their order; only non-empty buckets appear."""

    grouped: dict[str, list[SearchHit]] = {}
    for hit in hits:
        grouped.setdefault(HIT_GROUPS[hit.level], []).append(hit)
    return grouped
