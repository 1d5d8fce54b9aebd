from __future__ import annotations

from algowiki.domain.ingest import RebuildContext, ingest_algorithms, ingest_problems
from algowiki.domain.model import ALGORITHM_FIELDS, attribute_name
from algowiki.domain.ports.reporting import MissingReference, ReportKind
from algowiki.domain.sources import SourceTables
from tests.helpers.fakes import RecordingReporter, fake_repositories
from tests.helpers.sources import algorithm_row, problem_row

PROBLEMS = (
    problem_row("Shortest Path", "Single-Source Shortest Path", alias="SSSP"),
    problem_row("Shortest Path", "All-Pairs Shortest Path", alias="APSP"),
    problem_row("Graph Search", "SSSP"),
    problem_row("Sorting", "Sorting"),
)


def _context(reporter: RecordingReporter | None = None) -> RebuildContext:
    context = RebuildContext(repositories=fake_repositories(), reporter=reporter or RecordingReporter())
    ingest_problems(SourceTables(problems=PROBLEMS), context)
    return context


def test_algorithm_fans_out_over_listed_variations() -> None:
    context = _context()
    tables = SourceTables(
        algorithms=(algorithm_row("Shortest Path", "APSP; SSSP", "Bellman-Ford", year="1958"),)
    )

    added = ingest_algorithms(tables, context)

    assert [algorithm.problem.variation for algorithm in added] == [
        "All-Pairs Shortest Path",
        "Single-Source Shortest Path",
    ]
    assert all(algorithm.name == "Bellman-Ford" for algorithm in added)
    assert all(algorithm.year == "1958" for algorithm in added)
    assert context.algorithms == added


def test_algorithm_resolution_is_scoped_to_family() -> None:
    context = _context()
    tables = SourceTables(algorithms=(algorithm_row("Graph Search", "SSSP", "BFS"),))

    [algorithm] = ingest_algorithms(tables, context)

    assert algorithm.problem.family == "Graph Search"


def test_empty_variation_defaults_to_family_name() -> None:
    context = _context()
    tables = SourceTables(algorithms=(algorithm_row("Sorting", "", "Merge sort"),))

    [algorithm] = ingest_algorithms(tables, context)

    assert algorithm.problem.variation == "Sorting"


def test_rows_without_family_are_skipped() -> None:
    context = _context()
    tables = SourceTables(algorithms=(algorithm_row("", "SSSP", "Nobody's algorithm"),))

    assert ingest_algorithms(tables, context) == []


def test_parallel_rows_are_flagged_and_all_sheets_are_read() -> None:
    context = _context()
    tables = SourceTables(
        algorithms=(algorithm_row("Sorting", "Sorting", "Merge sort"),),
        late_algorithms=(algorithm_row("Sorting", "Sorting", "Tim sort"),),
        parallel_algorithms=(algorithm_row("Sorting", "Sorting", "Bitonic sort", parallel="0"),),
    )

    added = ingest_algorithms(tables, context)

    assert [(algorithm.name, algorithm.parallel) for algorithm in added] == [
        ("Merge sort", ""),
        ("Tim sort", ""),
        ("Bitonic sort", "1"),
    ]


def test_unresolved_variations_are_reported() -> None:
    reporter = RecordingReporter()
    context = _context(reporter)
    tables = SourceTables(
        algorithms=(algorithm_row("Shortest Path", "APSP; Widest Path", "Floyd-Warshall"),)
    )

    added = ingest_algorithms(tables, context)

    assert len(added) == 1
    assert reporter.cleared == [ReportKind.ALGORITHMS]
    assert reporter.published[ReportKind.ALGORITHMS] == [
        MissingReference("Shortest Path", "Widest Path", "Floyd-Warshall")
    ]
    assert context.counters.algorithms_not_found == 1


def test_report_is_cleared_but_not_written_when_everything_resolves() -> None:
    reporter = RecordingReporter()
    context = _context(reporter)

    ingest_algorithms(SourceTables(algorithms=(algorithm_row("Sorting", "", "Heap sort"),)), context)

    assert reporter.cleared == [ReportKind.ALGORITHMS]
    assert reporter.published == {}


def test_algorithm_template_fills_every_known_field() -> None:
    context = _context()
    row = algorithm_row(
        "Sorting",
        "Sorting",
        "Quicksort",
        timeComplexityClass="2",
        spanEncoding="1",
        reviewed="2",
        unrelatedColumn="ignored",
    )

    [algorithm] = ingest_algorithms(SourceTables(algorithms=(row,)), context)
    described = algorithm.describes()

    assert len(ALGORITHM_FIELDS) == 55
    assert set(described) == set(ALGORITHM_FIELDS)
    assert described["timeComplexityClass"] == "2"
    assert algorithm.span_encoding == "1"
    assert algorithm.reviewed == "2"
    assert algorithm.gpu_based == ""
    assert not hasattr(algorithm, attribute_name("unrelatedColumn"))
