"""CSV reports of references the rebuild could not resolve."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from algowiki.domain.ports.reporting import MissingReferenceReporter, ReportKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from algowiki.domain.ports.reporting import MissingReference

log = logging.getLogger(__name__)

REPORT_FILES: Final[dict[ReportKind, tuple[str, tuple[str, str, str]]]] = {
    ReportKind.ALGORITHMS: ("reportAlgorithmsNotFound.csv", ("family", "variation", "algorithm")),
    ReportKind.REDUCTIONS: ("reportReductionsNotFound.csv", ("family", "variation", "reduction")),
}


@dataclass(slots=True)
class CsvReportWriter:
    """Writes one ``;``-delimited file per report kind into ``directory``."""

    directory: Path

    def path_for(self, kind: ReportKind) -> Path:
        return self.directory / REPORT_FILES[kind][0]

    def clear(self, kind: ReportKind) -> None:
        self.path_for(kind).unlink(missing_ok=True)

    def publish(self, kind: ReportKind, entries: Sequence[MissingReference]) -> None:
        filename, header = REPORT_FILES[kind]
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, delimiter=";", lineterminator="\n")
            writer.writerow(header)
            writer.writerows((entry.family, entry.variation, entry.name) for entry in entries)
        log.info("Wrote %d unresolved %s to %s", len(entries), kind.value, path)


if TYPE_CHECKING:
    _reporter_check: MissingReferenceReporter = CsvReportWriter(Path())
