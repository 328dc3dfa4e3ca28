"""Wikidata dump adapter."""

from __future__ import annotations

from .dump import WikidataDumpLoader, iter_entities, open_dump, strip_dump_line
from .schema import ENTITY_PAYLOAD_ADAPTER, ItemPayload, PropertyPayload
from .translator import parse_entity, translate_entity

__all__ = [
    "ENTITY_PAYLOAD_ADAPTER",
    "ItemPayload",
    "PropertyPayload",
    "WikidataDumpLoader",
    "iter_entities",
    "open_dump",
    "parse_entity",
    "strip_dump_line",
    "translate_entity",
]
