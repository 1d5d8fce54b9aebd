"""Domain → family → variation structure over already ingested problems."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from algowiki.domain.model import DEFAULT_DOMAIN
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from algowiki.domain.model import Problem
    from algowiki.domain.reconciliation.resolve import ProblemIndex
    from algowiki.domain.sources import SourceRow

log = logging.getLogger(__name__)


def fill_missing_domains(problems: Sequence[Problem]) -> int:
    """Give every domain-less problem the domain of its family, else ``Others``.

    The donor is the first problem of the same family that had a domain before
    filling started, so filled problems never donate to each other.
    """

    donors: dict[str, tuple[str, str]] = {}
    for problem in problems:
        if problem.has_domain:
            donors.setdefault(problem.family_slug, (problem.domain, problem.domain_description))

    filled = 0
    for problem in problems:
        if problem.has_domain:
            continue
        donor = donors.get(problem.family_slug)
        if donor is None:
            problem.assign_domain(DEFAULT_DOMAIN)
        else:
            problem.assign_domain(*donor)
        filled += 1

    log.debug("Filled domain of %d problems", filled)
    return filled


def link_parents(rows: Iterable[SourceRow], index: ProblemIndex) -> int:
    """Point each problem at the parent named by its source row."""

    linked = 0
    for row in rows:
        parents = cell(row, "parents")
        if not parents:
            continue
        parent = index.resolve(parents)
        if parent is None:
            log.debug("Unknown parent %r", parents)
            continue
        child = index.find(cell(row, "familyName"), cell(row, "variation"))
        if child is None:
            continue
        child.parent = parent
        linked += 1
    return linked
