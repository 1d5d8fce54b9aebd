"""Text-to-identifier normalization used for every identity comparison."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

LIST_SEPARATOR: Final[str] = ";"

_DISALLOWED = re.compile(r"[^a-z0-9\-']")
_HYPHEN_RUN = re.compile(r"-+")


def slugify(text: str | None) -> str:
    """Return the canonical identifier for ``text``.

    Lowercases, replaces every character outside ``[a-z0-9-']`` with ``-`` and
    collapses runs of ``-``. Two display strings with the same slug denote the
    same entity.
    """

    if not text:
        return ""
    return _HYPHEN_RUN.sub("-", _DISALLOWED.sub("-", text.lower()))


def split_list(text: str | None) -> tuple[str, ...]:
    """Split a semicolon-delimited cell into trimmed entries (order kept)."""

    if not text:
        return ()
    return tuple(part.strip() for part in text.split(LIST_SEPARATOR))


def slug_list(text: str | None) -> tuple[str, ...]:
    return tuple(slugify(part) for part in split_list(text))


def join_slugs(slugs: Iterable[str]) -> str:
    return LIST_SEPARATOR.join(slugs)
