"""Pydantic models describing the Sheets ``values.get`` payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SheetsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ValueRange(SheetsBaseModel):
    """A rectangular block of cells; trailing empty cells and rows are omitted by the API."""

    range: str = ""
    major_dimension: str = Field(default="ROWS", alias="majorDimension")
    values: list[list[str]] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def _cells_as_text(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [
            ["" if cell is None else str(cell) for cell in row] if isinstance(row, list) else row
            for row in value
        ]


class ErrorDetail(SheetsBaseModel):
    code: int | None = None
    message: str = ""
    status: str | None = None


class ErrorResponse(SheetsBaseModel):
    error: ErrorDetail
