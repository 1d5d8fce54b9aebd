"""Reductions sheet → :class:`Reduction` edges.

Endpoints nobody described in the Problems sheet become placeholder problems,
so every reduction row is kept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from algowiki.domain.model import REDUCTION_COLUMNS, Problem, Reduction
from algowiki.domain.ports.reporting import MissingReference, ReportKind
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterable

    from algowiki.domain.ingest.context import RebuildContext
    from algowiki.domain.sources import SourceRow

log = logging.getLogger(__name__)

# the sheet calls it "references"; the table keeps the longer name
_SOURCE_COLUMN = {"reductionReferences": "references"}


def _endpoint(
    row: SourceRow,
    *,
    family_key: str,
    variation_key: str,
    context: RebuildContext,
    not_found: list[MissingReference],
) -> Problem:
    variation = cell(row, variation_key)
    problem = context.problems.resolve(variation)
    if problem is not None:
        return problem

    family = cell(row, family_key)
    # blank variations never resolve by name; reuse the one placeholder per family
    known = context.problems.find(family, variation)
    if known is not None:
        return known

    placeholder = Problem.placeholder(family=family, variation=variation)
    context.repositories.problems.add(placeholder)
    context.problems.register(placeholder)
    context.counters.placeholders += 1
    not_found.append(MissingReference(family, variation, cell(row, "reductionId")))
    log.debug("Created placeholder problem %r / %r", family, variation)
    return placeholder


def reduction_from_row(row: SourceRow, *, source: Problem, target: Problem) -> Reduction:
    values = {
        attr: cell(row, _SOURCE_COLUMN.get(column, column))
        for column, attr in REDUCTION_COLUMNS.items()
    }
    return Reduction(source=source, target=target, **values)


def ingest_reductions(rows: Iterable[SourceRow], context: RebuildContext) -> list[Reduction]:
    context.reporter.clear(ReportKind.REDUCTIONS)
    not_found: list[MissingReference] = []
    added: list[Reduction] = []

    for row in rows:
        source = _endpoint(
            row,
            family_key="fromProblem",
            variation_key="fromVariation",
            context=context,
            not_found=not_found,
        )
        target = _endpoint(
            row,
            family_key="toProblem",
            variation_key="toVariation",
            context=context,
            not_found=not_found,
        )
        reduction = reduction_from_row(row, source=source, target=target)
        context.repositories.reductions.add(reduction)
        added.append(reduction)

    context.counters.reductions += len(added)
    if not_found:
        context.reporter.publish(ReportKind.REDUCTIONS, not_found)
    log.info("Ingested %d reductions, %d placeholder problems", len(added), len(not_found))
    return added
