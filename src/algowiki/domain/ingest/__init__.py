"""Ingesters turning source rows into catalog entities."""

from __future__ import annotations

from .algorithms import ingest_algorithms
from .context import RebuildContext, RebuildCounters
from .glossary import ingest_glossary
from .hypotheses import ingest_hypotheses
from .problems import ingest_problems
from .reductions import ingest_reductions

__all__ = [
    "RebuildContext",
    "RebuildCounters",
    "ingest_algorithms",
    "ingest_glossary",
    "ingest_hypotheses",
    "ingest_problems",
    "ingest_reductions",
]
