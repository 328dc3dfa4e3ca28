"""Readers for the auxiliary certification datasets."""

from __future__ import annotations

from .bcorp import BCorpRecord, read_bcorp
from .cache import JsonCacheSink, WikidataCachePayload, read_wikidata_cache
from .fashion_transparency_index import FtiMatch, FtiRecord, read_fti, read_fti_matches
from .loading import load_condensing_sources, load_optional
from .tco import TcoEntry, read_tco

__all__ = [
    "BCorpRecord",
    "FtiMatch",
    "FtiRecord",
    "JsonCacheSink",
    "TcoEntry",
    "WikidataCachePayload",
    "load_condensing_sources",
    "load_optional",
    "read_bcorp",
    "read_fti",
    "read_fti_matches",
    "read_tco",
    "read_wikidata_cache",
]
