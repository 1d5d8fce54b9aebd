"""Glossary sheet → :class:`GlossaryEntry` rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from algowiki.domain.model import GlossaryEntry
from algowiki.domain.sources import cell

if TYPE_CHECKING:
    from collections.abc import Iterable

    from algowiki.domain.ingest.context import RebuildContext
    from algowiki.domain.sources import SourceRow


def ingest_glossary(rows: Iterable[SourceRow], context: RebuildContext) -> list[GlossaryEntry]:
    added: list[GlossaryEntry] = []
    for row in rows:
        entry = GlossaryEntry(
            term=cell(row, "term"),
            definition=cell(row, "definition"),
            category=cell(row, "category"),
        )
        context.repositories.glossary.add(entry)
        added.append(entry)
    context.counters.glossary += len(added)
    return added
