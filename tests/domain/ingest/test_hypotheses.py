from __future__ import annotations

from algowiki.domain.ingest import RebuildContext, ingest_hypotheses, ingest_problems
from algowiki.domain.sources import SourceTables
from tests.helpers.fakes import RecordingReporter, fake_repositories
from tests.helpers.sources import hypothesis_row, problem_row


def test_hypotheses_attach_to_resolved_target_and_drop_the_rest() -> None:
    reporter = RecordingReporter()
    context = RebuildContext(repositories=fake_repositories(), reporter=reporter)
    ingest_problems(
        SourceTables(problems=(problem_row("Shortest Path", "All-Pairs Shortest Path", alias="APSP"),)),
        context,
    )
    rows = [
        hypothesis_row("APSP", "APSP Hypothesis", hypothesisId="H1", impliedBy="SETH"),
        hypothesis_row("Nowhere", "Dangling Hypothesis"),
    ]

    added = ingest_hypotheses(rows, context)

    assert [hypothesis.name for hypothesis in added] == ["APSP Hypothesis"]
    assert added[0].target.variation == "All-Pairs Shortest Path"
    assert added[0].hypothesis_id == "H1"
    assert added[0].implied_by == "SETH"
    assert context.counters.hypotheses_dropped == 1
    assert reporter.cleared == []
    assert reporter.published == {}
