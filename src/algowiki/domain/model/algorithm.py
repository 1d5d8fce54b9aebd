"""Algorithms solving a problem variation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .problem import Problem

# Column names as they appear in the source sheets and in the ``algorithms`` table.
ALGORITHM_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "algorithmDescription",
    "finalCall",
    "exactProblemStatement",
    "exactAlgorithm",
    "timeComplexityAverage",
    "averageCaseDistribution",
    "reference",
    "year",
    "paperReferenceLink",
    "constants",
    "derived",
    "paperReferenceForConstants",
    "timeComplexityImprovement",
    "transitionClass",
    "timeComplexityClass",
    "paramTimeClass",
    "timeComplexityWorstOnly",
    "parallelAlgorithmSpanDepth",
    "spanEncoding",
    "parallelAlgorithmSpanReferences",
    "parallelAlgorithmWork",
    "workEncoding",
    "parallelAlgorithmWorkReferences",
    "workEfficiencyReference",
    "parameterDefinitions",
    "preferredParameter",
    "timeComplexityReference",
    "derivedTimeComplexity",
    "computationalModel",
    "modelEncoding",
    "unitOfSpace",
    "spaceComplexityClass",
    "paramSpaceClass",
    "spaceComplexityAuxiliary",
    "spaceComplexityReference",
    "derivedSpaceComplexity",
    "spaceComplexityInOriginalPaper",
    "interestingSpaceComplexity",
    "randomized",
    "typeOfRandomizedAlgorithm",
    "approximate",
    "approximationFactor",
    "heuristicBased",
    "parallel",
    "numberOfProcessors",
    "numberOfProcessorsEncoding",
    "quantum",
    "gpuBased",
    "otherReferences",
    "problemStatement",
    "title",
    "authors",
    "notes",
    "reviewed",
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def attribute_name(column: str) -> str:
    """``timeComplexityClass`` -> ``time_complexity_class``."""

    return _CAMEL_BOUNDARY.sub("_", column).lower()


@dataclass(eq=False, kw_only=True)
class Algorithm:
    id: int | None = None
    problem: Problem

    name: str = ""
    algorithm_description: str = ""
    final_call: str = ""
    exact_problem_statement: str = ""
    exact_algorithm: str = ""
    time_complexity_average: str = ""
    average_case_distribution: str = ""
    reference: str = ""
    year: str = ""
    paper_reference_link: str = ""
    constants: str = ""
    derived: str = ""
    paper_reference_for_constants: str = ""
    time_complexity_improvement: str = ""
    transition_class: str = ""
    time_complexity_class: str = ""
    param_time_class: str = ""
    time_complexity_worst_only: str = ""

    # parallel model
    parallel_algorithm_span_depth: str = ""
    span_encoding: str = ""
    parallel_algorithm_span_references: str = ""
    parallel_algorithm_work: str = ""
    work_encoding: str = ""
    parallel_algorithm_work_references: str = ""
    work_efficiency_reference: str = ""

    parameter_definitions: str = ""
    preferred_parameter: str = ""
    time_complexity_reference: str = ""
    derived_time_complexity: str = ""
    computational_model: str = ""
    model_encoding: str = ""

    # space
    unit_of_space: str = ""
    space_complexity_class: str = ""
    param_space_class: str = ""
    space_complexity_auxiliary: str = ""
    space_complexity_reference: str = ""
    derived_space_complexity: str = ""
    space_complexity_in_original_paper: str = ""
    interesting_space_complexity: str = ""

    # encoded categories
    randomized: str = ""
    type_of_randomized_algorithm: str = ""
    approximate: str = ""
    approximation_factor: str = ""
    heuristic_based: str = ""
    parallel: str = ""
    number_of_processors: str = ""
    number_of_processors_encoding: str = ""
    quantum: str = ""
    gpu_based: str = ""

    other_references: str = ""
    problem_statement: str = ""
    title: str = ""
    authors: str = ""
    notes: str = ""
    reviewed: str = ""

    def describes(self) -> dict[str, str]:
        """Descriptive fields keyed by column name (everything except identity)."""

        return {column: getattr(self, attribute_name(column)) for column in ALGORITHM_FIELDS}
