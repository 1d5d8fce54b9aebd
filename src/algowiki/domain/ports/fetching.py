"""Ports for fetching the raw catalog sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from algowiki.domain.sources import SourceTables


class SourceFetchError(RuntimeError):
    """Raised when any source table cannot be retrieved or parsed."""


@runtime_checkable
class SourceFetcher(Protocol):
    """Callable port returning every source table in one consistent read."""

    def __call__(self) -> SourceTables: ...


__all__ = ["SourceFetchError", "SourceFetcher"]
