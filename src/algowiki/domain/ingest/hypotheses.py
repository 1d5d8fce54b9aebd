"""Hypotheses sheet → :class:`Hypothesis` rows attached to a known problem."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from algowiki.domain.model import HYPOTHESIS_COLUMNS, Hypothesis
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterable

    from algowiki.domain.ingest.context import RebuildContext
    from algowiki.domain.sources import SourceRow

log = logging.getLogger(__name__)


def ingest_hypotheses(rows: Iterable[SourceRow], context: RebuildContext) -> list[Hypothesis]:
    """Rows whose target resolves to no problem are dropped without a report."""

    added: list[Hypothesis] = []
    dropped = 0
    for row in rows:
        target = context.problems.resolve(cell(row, "target"))
        if target is None:
            dropped += 1
            continue
        values = {attr: cell(row, column) for column, attr in HYPOTHESIS_COLUMNS.items()}
        hypothesis = Hypothesis(target=target, **values)
        context.repositories.hypotheses.add(hypothesis)
        added.append(hypothesis)

    context.counters.hypotheses += len(added)
    context.counters.hypotheses_dropped += dropped
    log.info("Ingested %d hypotheses, dropped %d", len(added), dropped)
    return added
