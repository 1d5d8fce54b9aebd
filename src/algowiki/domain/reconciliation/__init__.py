"""Reconciliation of free-text references into the problem hierarchy."""

from __future__ import annotations

from .hierarchy import fill_missing_domains, link_parents
from .resolve import ProblemIndex

__all__ = ["ProblemIndex", "fill_missing_domains", "link_parents"]
