"""Fashion Transparency Index scores and their Wikidata matches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .readers import read_csv_records, read_yaml_records

if TYPE_CHECKING:
    from pathlib import Path


class FtiRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str
    score: int = Field(ge=0, le=100)


class FtiMatch(BaseModel):
    """Links a brand name from the index to an organisation id."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str
    wikidata_id: str


def read_fti(path: Path) -> list[FtiRecord]:
    return read_csv_records(path, FtiRecord)


def read_fti_matches(path: Path) -> list[FtiMatch]:
    return read_yaml_records(path, FtiMatch)
