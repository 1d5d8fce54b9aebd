"""Translate raw sheet cells into field-keyed source rows."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

    from algowiki.domain.sources import SourceRow

# headers whose camel-cased form would not match the catalog column names
HEADER_RENAMES: Final[dict[str, str]] = {
    "Algorithm Name": "name",
    "exact": "exactAlgorithm",
    "Span Encoding (T_1)": "spanEncoding",
    "Work Encoding (T_inf)": "workEncoding",
    "Reference mentions work efficiency?": "workEfficiencyReference",
    "Type of Randomized Algorithm (e.g. Las Vegas, Monte Carlo, Atlantic City)": (
        "typeOfRandomizedAlgorithm"
    ),
    "Approximation Factor (if approximate algorithm)": "approximationFactor",
    "# of\nProcessors": "numberOfProcessors",
    "# of Proc Encoding": "numberOfProcessorsEncoding",
    "Looked at?": "reviewed",
    "Looked at? (0 - no, 0.001 - briefly but seems to have issues, 1 - partially, "
    "2 - [mostly] yes)": "reviewed",
}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_HYPHEN_THEN_CHAR = re.compile(r"-+(.)")
_EDGE_HYPHEN = re.compile(r"^-|-$")
_URL = re.compile(r"^https?://")


def to_camel_case(text: str | None) -> str:
    """``"Time Complexity Class"`` -> ``"timeComplexityClass"``."""

    if not text:
        return ""
    hyphenated = _NON_ALNUM.sub("-", text.lower())
    camel = _HYPHEN_THEN_CHAR.sub(lambda match: match.group(1).upper(), hyphenated)
    return _EDGE_HYPHEN.sub("", camel)


def field_name(header: str) -> str:
    return HEADER_RENAMES.get(header) or to_camel_case(header)


def clean_cell(value: str | None) -> str:
    """Question marks are editorial noise in the sheets, except inside URLs."""

    if not value:
        return ""
    if _URL.match(value):
        return value
    return value.replace("?", "")


def rows_from_values(values: Sequence[Sequence[str]]) -> tuple[SourceRow, ...]:
    """First row is the header; every later row becomes one mapping."""

    if not values:
        return ()
    keys = [field_name(header) for header in values[0]]
    rows: list[SourceRow] = []
    for raw in values[1:]:
        item: dict[str, str] = {}
        for index, key in enumerate(keys):
            if not key:
                continue
            item[key] = clean_cell(raw[index]) if index < len(raw) else ""
        rows.append(item)
    return tuple(rows)
