"""Diagnostics port for references that could not be resolved."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


class ReportKind(StrEnum):
    ALGORITHMS = "algorithms"
    REDUCTIONS = "reductions"


@dataclass(frozen=True, slots=True)
class MissingReference:
    """A family/variation pair some row pointed at, and the row that did."""

    family: str
    variation: str
    name: str


@runtime_checkable
class MissingReferenceReporter(Protocol):
    def clear(self, kind: ReportKind) -> None: ...

    def publish(self, kind: ReportKind, entries: Sequence[MissingReference]) -> None: ...


class NullReporter:
    """Reporter that discards everything."""

    def clear(self, kind: ReportKind) -> None:
        _ = kind

    def publish(self, kind: ReportKind, entries: Sequence[MissingReference]) -> None:
        _ = (kind, entries)


__all__ = ["MissingReference", "MissingReferenceReporter", "NullReporter", "ReportKind"]
