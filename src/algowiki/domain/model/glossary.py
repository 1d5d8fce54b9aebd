"""Glossary terms; independent of the taxonomy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class GlossaryEntry:
    id: int | None = None
    term: str = ""
    definition: str = ""
    category: str = ""
