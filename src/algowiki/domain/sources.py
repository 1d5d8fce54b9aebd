"""Raw tabular source rows as delivered by a source fetcher."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

type SourceRow = Mapping[str, str]


class SourceTable(StrEnum):
    """Titles of the spreadsheet tabs feeding the catalog."""

    PROBLEMS = "Problems"
    ALGORITHMS = "Sheet1"
    LATE_ALGORITHMS = "New Entries to Sheet 1"
    PARALLEL_ALGORITHMS = "Parallel Algos"
    HYPOTHESES = "Assumptions/Hypotheses"
    REDUCTIONS = "Reductions"
    FAMILIES = "Problem Families"
    GLOSSARY = "Glossary"
    DOMAINS = "Domains"


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceTables:
    """One tuple of rows per source tab; the first sheet row is already consumed as header."""

    problems: tuple[SourceRow, ...] = ()
    algorithms: tuple[SourceRow, ...] = ()
    late_algorithms: tuple[SourceRow, ...] = ()
    parallel_algorithms: tuple[SourceRow, ...] = ()
    hypotheses: tuple[SourceRow, ...] = ()
    reductions: tuple[SourceRow, ...] = ()
    families: tuple[SourceRow, ...] = ()
    glossary: tuple[SourceRow, ...] = ()
    domains: tuple[SourceRow, ...] = ()

    @classmethod
    def from_tabs(cls, tabs: Mapping[SourceTable, tuple[SourceRow, ...]]) -> SourceTables:
        def rows(table: SourceTable) -> tuple[SourceRow, ...]:
            return tabs.get(table, ())

        return cls(
            problems=rows(SourceTable.PROBLEMS),
            algorithms=rows(SourceTable.ALGORITHMS),
            late_algorithms=rows(SourceTable.LATE_ALGORITHMS),
            parallel_algorithms=rows(SourceTable.PARALLEL_ALGORITHMS),
            hypotheses=rows(SourceTable.HYPOTHESES),
            reductions=rows(SourceTable.REDUCTIONS),
            families=rows(SourceTable.FAMILIES),
            glossary=rows(SourceTable.GLOSSARY),
            domains=rows(SourceTable.DOMAINS),
        )


def cell(row: SourceRow, key: str) -> str:
    """Cell value as text; absent or ``None`` cells read as ``""``."""

    value = row.get(key)
    if value is None:
        return ""
    return str(value)


__all__ = ["SourceRow", "SourceTable", "SourceTables", "cell"]
