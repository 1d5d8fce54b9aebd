"""Mutable state shared by the ingesters during one rebuild."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from algowiki.domain.ports.reporting import NullReporter
from algowiki.domain.reconciliation.resolve import ProblemIndex

if TYPE_CHECKING:
    from algowiki.domain.model import Algorithm
    from algowiki.domain.ports.reporting import MissingReferenceReporter
    from algowiki.domain.ports.unit_of_work import CatalogRepositories


@dataclass(slots=True)
class RebuildCounters:
    problems: int = 0
    placeholders: int = 0
    domains_filled: int = 0
    parents_linked: int = 0
    algorithms: int = 0
    algorithms_not_found: int = 0
    reductions: int = 0
    hypotheses: int = 0
    hypotheses_dropped: int = 0
    glossary: int = 0
    search_entries: int = 0


@dataclass(slots=True)
class RebuildContext:
    """Repositories of the open unit of work plus the in-memory catalog built so far."""

    repositories: CatalogRepositories
    reporter: MissingReferenceReporter = field(default_factory=NullReporter)
    problems: ProblemIndex = field(default_factory=ProblemIndex)
    algorithms: list[Algorithm] = field(default_factory=list)
    counters: RebuildCounters = field(default_factory=RebuildCounters)
