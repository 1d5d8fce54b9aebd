"""Algorithm sheets → :class:`Algorithm` rows, one per resolved variation."""

from __future__ import annotations

import logging
from itertools import chain
from typing import TYPE_CHECKING

from algowiki.domain.model import ALGORITHM_FIELDS, Algorithm, attribute_name
from algowiki.domain.ports.reporting import MissingReference, ReportKind
from algowiki.domain.slugs import split_list
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterator

    from algowiki.domain.ingest.context import RebuildContext
    from algowiki.domain.model import Problem
    from algowiki.domain.sources import SourceRow, SourceTables

log = logging.getLogger(__name__)


def algorithm_rows(tables: SourceTables) -> Iterator[SourceRow]:
    """All algorithm rows; rows of the parallel sheet are flagged ``parallel``."""

    parallel = ({**row, "parallel": "1"} for row in tables.parallel_algorithms)
    return chain(tables.algorithms, tables.late_algorithms, parallel)


def algorithm_from_row(row: SourceRow, problem: Problem) -> Algorithm:
    values = {attribute_name(column): cell(row, column) for column in ALGORITHM_FIELDS}
    return Algorithm(problem=problem, **values)


def ingest_algorithms(tables: SourceTables, context: RebuildContext) -> list[Algorithm]:
    """Fan each row out over its ``;``-separated variations within the row's family.

    Variations that match no problem are collected and published as a report.
    """

    context.reporter.clear(ReportKind.ALGORITHMS)
    not_found: list[MissingReference] = []
    added: list[Algorithm] = []

    for row in algorithm_rows(tables):
        family = cell(row, "familyName")
        if not family:
            continue
        variations = cell(row, "variation") or family
        for variation in split_list(variations):
            problem = context.problems.resolve(variation, scope=family)
            if problem is None:
                log.debug("Algorithm %r: no variation %r in %r", cell(row, "name"), variation, family)
                not_found.append(MissingReference(family, variation, cell(row, "name")))
                continue
            algorithm = algorithm_from_row(row, problem)
            context.repositories.algorithms.add(algorithm)
            added.append(algorithm)

    context.algorithms.extend(added)
    context.counters.algorithms += len(added)
    context.counters.algorithms_not_found += len(not_found)
    if not_found:
        context.reporter.publish(ReportKind.ALGORITHMS, not_found)
    log.info("Ingested %d algorithms, %d unresolved", len(added), len(not_found))
    return added
