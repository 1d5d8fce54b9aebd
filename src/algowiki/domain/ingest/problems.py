"""Problems sheet → :class:`Problem` rows, enriched from the domain and family sheets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from algowiki.domain.model import Problem
from algowiki.domain.slugs import slugify
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterable

    from algowiki.domain.ingest.context import RebuildContext
    from algowiki.domain.sources import SourceRow, SourceTables

log = logging.getLogger(__name__)

# problems table attribute -> source column, where they differ only by case style
_DESCRIPTIVE_COLUMNS = {
    "description_reference": "descriptionReference",
    "parameters": "parameters",
    "parameter_for_graphs": "parameterForGraphs",
    "input_size": "inputSize",
    "output_size": "outputSize",
    "best_known_upper_bound": "bestKnownUpperBound",
    "upper_bound_reference": "upperBoundReference",
    "best_known_lower_bound": "bestKnownLowerBound",
    "lower_bound_reference": "lowerBoundReference",
    "problem_properties": "problemProperties",
}


def _first_by_slug(rows: Iterable[SourceRow], key: str) -> dict[str, SourceRow]:
    found: dict[str, SourceRow] = {}
    for row in rows:
        found.setdefault(slugify(cell(row, key)), row)
    return found


def problem_from_row(
    row: SourceRow,
    *,
    domains: dict[str, SourceRow],
    families: dict[str, SourceRow],
) -> Problem:
    problem = Problem(
        family=cell(row, "familyName"),
        variation=cell(row, "variation"),
        domain=cell(row, "domain"),
        alias=cell(row, "alias"),
        description=cell(row, "problemDescription"),
        short_description=cell(row, "abridgedProblemDescription"),
        **{attr: cell(row, column) for attr, column in _DESCRIPTIVE_COLUMNS.items()},
    )
    if (domain_row := domains.get(problem.domain_slug)) is not None:
        problem.domain_description = cell(domain_row, "domainDescription")
    if (family_row := families.get(problem.family_slug)) is not None:
        problem.family_properties = cell(family_row, "familyProperties")
        problem.family_description = cell(family_row, "familyDescription")
    return problem


def ingest_problems(tables: SourceTables, context: RebuildContext) -> list[Problem]:
    """Add one problem per Problems row that names a family."""

    domains = _first_by_slug(tables.domains, "domainName")
    families = _first_by_slug(tables.families, "familyName")

    added: list[Problem] = []
    for row in tables.problems:
        if not cell(row, "familyName"):
            continue
        problem = problem_from_row(row, domains=domains, families=families)
        context.repositories.problems.add(problem)
        context.problems.register(problem)
        added.append(problem)

    context.counters.problems += len(added)
    log.info("Ingested %d problems", len(added))
    return added
