"""Cross-problem statements: reductions between problems and hypotheses about them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .problem import Problem

# source/column name -> attribute name
REDUCTION_COLUMNS: Final[dict[str, str]] = {
    "type": "reduction_type",
    "randomized": "randomized",
    "calls": "calls",
    "timeComplexity": "time_complexity",
    "spaceComplexity": "space_complexity",
    "model": "model",
    "assumptionHypothesis": "assumption_hypothesis",
    "implications": "implications",
    "impliedLowerBoundPower": "implied_lower_bound_power",
    "reductionReferences": "reduction_references",
    "link": "link",
    "year": "year",
    "preserves": "preserves",
    "notes": "notes",
    "reductionId": "reduction_id",
    "description": "description",
}

HYPOTHESIS_COLUMNS: Final[dict[str, str]] = {
    "name": "name",
    "alias": "alias",
    "hypothesisId": "hypothesis_id",
    "description": "description",
    "time": "time",
    "space": "space",
    "computationModel": "computation_model",
    "constants": "constants",
    "implies": "implies",
    "impliedBy": "implied_by",
    "proven": "proven",
    "impliesReferences": "implies_references",
    "impliedByReferences": "implied_by_references",
    "reference": "reference",
    "year": "year",
    "notes": "notes",
}


@dataclass(eq=False, kw_only=True)
class Reduction:
    """Directed edge ``source -> target`` in the reduction graph."""

    id: int | None = None
    source: Problem
    target: Problem

    reduction_type: str = ""
    randomized: str = ""
    calls: str = ""
    time_complexity: str = ""
    space_complexity: str = ""
    model: str = ""
    assumption_hypothesis: str = ""
    implications: str = ""
    implied_lower_bound_power: str = ""
    reduction_references: str = ""
    link: str = ""
    year: str = ""
    preserves: str = ""
    notes: str = ""
    reduction_id: str = ""
    description: str = ""


@dataclass(eq=False, kw_only=True)
class Hypothesis:
    id: int | None = None
    target: Problem

    name: str = ""
    alias: str = ""
    hypothesis_id: str = ""
    description: str = ""
    time: str = ""
    space: str = ""
    computation_model: str = ""
    constants: str = ""
    implies: str = ""
    implied_by: str = ""
    proven: str = ""
    implies_references: str = ""
    implied_by_references: str = ""
    reference: str = ""
    year: str = ""
    notes: str = ""
