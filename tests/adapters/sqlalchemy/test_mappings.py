from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, text

from algowiki.domain.model import Algorithm, GlossaryEntry, Hypothesis, Problem, Reduction

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_problem_round_trip_keeps_camel_case_columns(sqlite_session: Session) -> None:
    parent = Problem(family="Shortest Path", variation="SSSP", domain="Graphs", alias="A; B")
    child = Problem(family="Shortest Path", variation="SSSP negative", domain="Graphs")
    child.parent = parent
    parent.number_of_algorithms = 3
    sqlite_session.add_all([parent, child])
    sqlite_session.commit()

    row = sqlite_session.execute(
        text(
            'SELECT "familySlug", "aliasSlug", "parentId", "numberOfAlgorithms" '
            "FROM problems WHERE variation = 'SSSP negative'"
        )
    ).one()
    assert row.familySlug == "shortest-path"
    assert row.aliasSlug == ""
    assert row.parentId == parent.id
    assert row.numberOfAlgorithms is None

    loaded = sqlite_session.scalars(select(Problem).where(Problem.variation == "SSSP")).one()
    assert loaded.alias_slug == "a;b"
    assert loaded.number_of_algorithms == 3


def test_algorithm_reduction_hypothesis_and_glossary_rows(sqlite_session: Session) -> None:
    source = Problem(family="Shortest Path", variation="APSP")
    target = Problem(family="Matrix Products", variation="Min-Plus Product")
    algorithm = Algorithm(problem=source, name="Floyd-Warshall", time_complexity_class="3")
    reduction = Reduction(source=source, target=target, reduction_type="Turing")
    hypothesis = Hypothesis(target=source, name="APSP Hypothesis")
    sqlite_session.add_all(
        [algorithm, reduction, hypothesis, GlossaryEntry(term="Slug", definition="identifier")]
    )
    sqlite_session.commit()

    algorithm_row = sqlite_session.execute(
        text('SELECT "problemId", "timeComplexityClass", "gpuBased" FROM algorithms')
    ).one()
    assert algorithm_row.problemId == source.id
    assert algorithm_row.timeComplexityClass == "3"
    assert algorithm_row.gpuBased == ""

    reduction_row = sqlite_session.execute(
        text('SELECT "fromProblemId", "toProblemId", type FROM reductions')
    ).one()
    assert (reduction_row.fromProblemId, reduction_row.toProblemId) == (source.id, target.id)
    assert reduction_row.type == "Turing"

    assert sqlite_session.execute(text('SELECT "targetProblemId" FROM hypothesis')).scalar_one() == (
        source.id
    )
    assert sqlite_session.execute(text("SELECT term FROM glossary")).scalar_one() == "Slug"
