from __future__ import annotations

from algowiki.domain.model import Problem
from algowiki.domain.reconciliation import ProblemIndex, fill_missing_domains, link_parents
from tests.helpers.sources import problem_row


def test_fill_missing_domains_uses_first_family_donor() -> None:
    first = Problem(family="Shortest Path", variation="SSSP", domain="Graphs")
    first.domain_description = "Vertices and edges."
    second = Problem(family="Shortest Path", variation="Widest Path", domain="Networks")
    missing = Problem(family="shortest path", variation="APSP")

    filled = fill_missing_domains([first, second, missing])

    assert filled == 1
    assert missing.domain == "Graphs"
    assert missing.domain_slug == "graphs"
    assert missing.domain_description == "Vertices and edges."


def test_fill_missing_domains_defaults_to_others() -> None:
    lonely = Problem(family="Matrix Products", variation="Min-Plus Product")
    sibling = Problem(family="Matrix Products", variation="Boolean Product")

    filled = fill_missing_domains([lonely, sibling])

    assert filled == 2
    assert lonely.domain == "Others"
    assert lonely.domain_slug == "others"
    # filled problems never donate to their siblings
    assert sibling.domain == "Others"


def test_fill_missing_domains_leaves_present_domains() -> None:
    problem = Problem(family="Sorting", variation="Comparison Sorting", domain="Sorting")

    assert fill_missing_domains([problem]) == 0
    assert problem.domain == "Sorting"


def test_link_parents_resolves_unscoped() -> None:
    parent = Problem(family="Shortest Path", variation="Single-Source Shortest Path", alias="SSSP")
    child = Problem(family="Negative Weights", variation="SSSP with negative weights")
    index = ProblemIndex([parent, child])
    rows = [
        problem_row("Shortest Path", "Single-Source Shortest Path"),
        problem_row("Negative Weights", "SSSP with negative weights", parents="SSSP"),
    ]

    linked = link_parents(rows, index)

    assert linked == 1
    assert child.parent is parent
    assert parent.parent is None


def test_link_parents_skips_unknown_parent() -> None:
    child = Problem(family="Sorting", variation="Integer Sorting")
    index = ProblemIndex([child])

    linked = link_parents([problem_row("Sorting", "Integer Sorting", parents="Nothing")], index)

    assert linked == 0
    assert child.parent is None
