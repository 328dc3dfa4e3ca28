"""TCO Certified companies matched to Wikidata."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .readers import read_yaml_records

if TYPE_CHECKING:
    from pathlib import Path


class TcoEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    company_name: str
    wikidata_id: str


def read_tco(path: Path) -> list[TcoEntry]:
    return read_yaml_records(path, TcoEntry)
