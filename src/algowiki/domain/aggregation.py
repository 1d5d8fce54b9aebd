"""Derived counters over the domain → family → variation hierarchy.

Three passes run in order and each overwrites the counters it writes, so a
problem ends up carrying the counts of the widest group that wrote last:
``number_of_algorithms`` and ``number_of_variations`` hold domain-wide values
after the final pass, exactly like the served catalog expects.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from algowiki.domain.model import Algorithm, Problem


@dataclass(frozen=True, slots=True)
class GroupTotals:
    families: int = 0
    variations: int = 0
    algorithms: int = 0


@dataclass(slots=True)
class CatalogTotals:
    """Totals per problem (keyed by identity), per family slug and per domain slug."""

    by_problem: dict[int, GroupTotals] = field(default_factory=dict)
    by_family: dict[str, GroupTotals] = field(default_factory=dict)
    by_domain: dict[str, GroupTotals] = field(default_factory=dict)

    def for_problem(self, problem: Problem) -> GroupTotals:
        return self.by_problem.get(id(problem), GroupTotals())


def _group(problems: Iterable[Problem], key: str) -> dict[str, list[Problem]]:
    groups: dict[str, list[Problem]] = defaultdict(list)
    for problem in problems:
        groups[getattr(problem, key)].append(problem)
    return groups


def recompute_counters(
    problems: Sequence[Problem], algorithms: Iterable[Algorithm]
) -> CatalogTotals:
    per_problem: Counter[int] = Counter(id(algorithm.problem) for algorithm in algorithms)
    totals = CatalogTotals()

    for problem in problems:
        count = per_problem[id(problem)]
        problem.number_of_algorithms = count
        totals.by_problem[id(problem)] = GroupTotals(variations=1, algorithms=count)

    for family_slug, members in _group(problems, "family_slug").items():
        family_totals = GroupTotals(
            families=1,
            variations=len(members),
            algorithms=sum(per_problem[id(member)] for member in members),
        )
        for member in members:
            member.number_of_variations = family_totals.variations
            member.number_of_algorithms = family_totals.algorithms
        totals.by_family[family_slug] = family_totals

    for domain_slug, members in _group(problems, "domain_slug").items():
        domain_totals = GroupTotals(
            families=len({member.family_slug for member in members}),
            variations=len(members),
            algorithms=sum(per_problem[id(member)] for member in members),
        )
        for member in members:
            member.number_of_families = domain_totals.families
            member.number_of_variations = domain_totals.variations
            member.number_of_algorithms = domain_totals.algorithms
        totals.by_domain[domain_slug] = domain_totals

    return totals
