"""B Corp registry export."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .readers import read_csv_records

if TYPE_CHECKING:
    from pathlib import Path


class BCorpRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    company_id: str | None = None
    company_name: str
    website: str | None = None


def read_bcorp(path: Path) -> list[BCorpRecord]:
    return read_csv_records(path, BCorpRecord)
