"""Identity resolution of free-text problem references.

Sheets refer to problems by display name: a variation name or one of its
aliases, sometimes qualified by the family that should contain it. Lookups go
through :class:`ProblemIndex`, which keeps problems in registration order so
that the earliest registered problem wins whenever several match.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from algowiki.domain.slugs import slugify

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from algowiki.domain.model import Problem

log = logging.getLogger(__name__)


class ProblemIndex:
    """Ordered, slug-keyed registry of every problem known to the current rebuild."""

    def __init__(self, problems: Iterable[Problem] = ()) -> None:
        self._problems: list[Problem] = []
        # slug -> positions of problems carrying it as variation or whole alias token
        self._by_slug: dict[str, list[int]] = {}
        self._by_pair: dict[tuple[str, str], int] = {}
        for problem in problems:
            self.register(problem)

    def __len__(self) -> int:
        return len(self._problems)

    def __iter__(self) -> Iterator[Problem]:
        return iter(self._problems)

    def __contains__(self, problem: object) -> bool:
        return any(problem is known for known in self._problems)

    @property
    def problems(self) -> tuple[Problem, ...]:
        return tuple(self._problems)

    def register(self, problem: Problem) -> Problem:
        position = len(self._problems)
        self._problems.append(problem)

        keys = [problem.variation_slug, *problem.alias_slugs]
        for key in dict.fromkeys(key for key in keys if key):
            self._by_slug.setdefault(key, []).append(position)
        self._by_pair.setdefault((problem.family_slug, problem.variation_slug), position)
        return problem

    def resolve(self, name: str | None, scope: str | None = None) -> Problem | None:
        """Return the first problem named ``name``, optionally within family ``scope``."""

        target = slugify(name)
        if not target:
            return None
        positions = self._by_slug.get(target, ())
        if scope is None:
            return self._problems[positions[0]] if positions else None

        family_slug = slugify(scope)
        for position in positions:
            candidate = self._problems[position]
            if candidate.family_slug == family_slug:
                return candidate
        log.debug("No problem %r in family %r", name, scope)
        return None

    def find(self, family: str | None, variation: str | None) -> Problem | None:
        """Return the first problem with exactly this family and variation."""

        position = self._by_pair.get((slugify(family), slugify(variation)))
        return None if position is None else self._problems[position]
