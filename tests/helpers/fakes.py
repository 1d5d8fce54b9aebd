"""In-memory doubles for the catalog ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from algowiki.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from types import TracebackType

    from algowiki.domain.ports.reporting import MissingReference, ReportKind
    from algowiki.domain.search import SearchEntry


class FakeRepository[T]:
    def __init__(self) -> None:
        self.items: list[T] = []

    def add(self, entity: T) -> None:
        self.items.append(entity)


class FakeSchema:
    def __init__(self) -> None:
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1


class FakeMetaInformation:
    def __init__(self) -> None:
        self.recorded: list[datetime] = []

    def record(self, rebuilt_at: datetime) -> None:
        self.recorded.append(rebuilt_at)


class FakeSearchIndex:
    def __init__(self) -> None:
        self.entries: list[SearchEntry] = []

    def rebuild(self, entries: Sequence[SearchEntry]) -> None:
        self.entries = list(entries)


def fake_repositories() -> CatalogRepositories:
    return CatalogRepositories(
        schema=FakeSchema(),
        problems=FakeRepository(),
        algorithms=FakeRepository(),
        reductions=FakeRepository(),
        hypotheses=FakeRepository(),
        glossary=FakeRepository(),
        meta=FakeMetaInformation(),
        search_index=FakeSearchIndex(),
    )


class FakeCatalogUnitOfWork:
    def __init__(self, repositories: CatalogRepositories | None = None) -> None:
        self._repositories = repositories or fake_repositories()
        self.committed = False
        self.rolled_back = False
        self.entered = 0

    @property
    def repositories(self) -> CatalogRepositories:
        return self._repositories

    def __enter__(self) -> FakeCatalogUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


@dataclass
class RecordingReporter:
    cleared: list[ReportKind] = field(default_factory=list)
    published: dict[ReportKind, list[MissingReference]] = field(default_factory=dict)

    def clear(self, kind: ReportKind) -> None:
        self.cleared.append(kind)

    def publish(self, kind: ReportKind, entries: Sequence[MissingReference]) -> None:
        self.published[kind] = list(entries)
