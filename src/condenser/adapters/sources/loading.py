"""Build the advisor indices from the auxiliary datasets.

Every enrichment dataset is optional: when it is missing or cannot be read,
a warning is logged and an empty index is used instead. The Fashion
Transparency Index matches are the exception; once score data is present,
the matches are required to attribute the scores and any problem with them
aborts the run.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from condenser.domain.advisors import (
    BCorpAdvisor,
    FashionTransparencyIndexAdvisor,
    TcoAdvisor,
    WikidataCache,
)
from condenser.domain.condensing import CondensingSources
from condenser.domain.errors import DecodeError, SourceReadError

from .bcorp import read_bcorp
from .cache import read_wikidata_cache
from .fashion_transparency_index import read_fti, read_fti_matches
from .tco import read_tco

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from condenser.config import CondensationConfig

log = getLogger(__name__)


def load_optional[T](
    name: str, path: Path, loader: Callable[[Path], T], empty: Callable[[], T]
) -> T:
    """Load an enrichment dataset, degrading to ``empty()`` on any read problem."""

    if not path.exists():
        log.warning("%s data not found at %s, continuing without it", name, path)
        return empty()
    try:
        return loader(path)
    except (SourceReadError, DecodeError) as exc:
        log.warning("Failed to load %s data, continuing without it: %s", name, exc)
        return empty()


def load_bcorp(path: Path) -> BCorpAdvisor:
    records = read_bcorp(path)
    return BCorpAdvisor.from_websites(record.website for record in records if record.website)


def load_tco(path: Path) -> TcoAdvisor:
    return TcoAdvisor.from_ids(entry.wikidata_id for entry in read_tco(path))


def load_fti(scores_path: Path, matches_path: Path) -> FashionTransparencyIndexAdvisor:
    scores = load_optional("Fashion Transparency Index", scores_path, read_fti, list)
    if not scores:
        return FashionTransparencyIndexAdvisor()
    matches = read_fti_matches(matches_path)
    return FashionTransparencyIndexAdvisor.from_records(
        ((record.name, record.score) for record in scores),
        ((match.name, match.wikidata_id) for match in matches),
    )


def load_condensing_sources(config: CondensationConfig) -> CondensingSources:
    cache = load_optional(
        "Wikidata cache", config.wikidata_cache_path, read_wikidata_cache, WikidataCache
    )
    bcorp = load_optional("B Corp", config.bcorp_path, load_bcorp, BCorpAdvisor)
    tco = load_optional("TCO", config.tco_path, load_tco, TcoAdvisor)
    fti = load_fti(config.fti_path, config.fti_matches_path)
    log.info(
        "Loaded sources: manufacturers=%s, classes=%s, bcorp_domains=%s, tco=%s, fti=%s",
        len(cache.manufacturer_ids),
        len(cache.classes),
        len(bcorp.domains),
        len(tco.companies),
        len(fti.scores),
    )
    return CondensingSources(cache=cache, bcorp=bcorp, tco=tco, fti=fti)
