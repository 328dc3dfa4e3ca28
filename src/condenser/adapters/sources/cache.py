"""JSON file holding the Wikidata manufacturer/class cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from condenser.adapters.output import write_atomically
from condenser.domain.advisors import WikidataCache
from condenser.domain.errors import DecodeError

from .readers import read_text

if TYPE_CHECKING:
    from pathlib import Path


class WikidataCachePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    manufacturer_ids: list[str] = Field(default_factory=list[str])
    classes: list[str] = Field(default_factory=list[str])


def read_wikidata_cache(path: Path) -> WikidataCache:
    try:
        payload = WikidataCachePayload.model_validate_json(read_text(path))
    except ValidationError as exc:
        raise DecodeError(f"Invalid Wikidata cache '{path}': {exc.error_count()} errors") from exc
    return WikidataCache(
        manufacturer_ids=frozenset(payload.manufacturer_ids),
        classes=frozenset(payload.classes),
    )


@dataclass(frozen=True, slots=True)
class JsonCacheSink:
    path: Path

    def write(self, cache: WikidataCache) -> None:
        payload = WikidataCachePayload(
            manufacturer_ids=sorted(cache.manufacturer_ids),
            classes=sorted(cache.classes),
        )
        write_atomically(self.path, payload.model_dump_json(indent=2).encode("utf-8"))
