"""Domain model of the problem taxonomy."""

from __future__ import annotations

from .algorithm import ALGORITHM_FIELDS, Algorithm, attribute_name
from .glossary import GlossaryEntry
from .problem import DEFAULT_DOMAIN, Problem
from .relations import HYPOTHESIS_COLUMNS, REDUCTION_COLUMNS, Hypothesis, Reduction

__all__ = [
    "ALGORITHM_FIELDS",
    "DEFAULT_DOMAIN",
    "HYPOTHESIS_COLUMNS",
    "REDUCTION_COLUMNS",
    "Algorithm",
    "GlossaryEntry",
    "Hypothesis",
    "Problem",
    "Reduction",
    "attribute_name",
]
