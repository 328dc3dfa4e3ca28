"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from condenser.adapters.output import JsonCondensedSink
from condenser.adapters.sources import JsonCacheSink, load_condensing_sources
from condenser.adapters.wikidata import WikidataDumpLoader
from condenser.domain.caching import CachingCollector, CachingProcessor, CachingSources
from condenser.domain.condensing import CondensingCollector, CondensingProcessor
from condenser.domain.processing import PipelineResult, ProcessingPipeline

if TYPE_CHECKING:
    from condenser.config import CachingConfig, CondensationConfig
    from condenser.domain.condensing import CondensingSources
    from condenser.domain.ports import EntitySource


log = getLogger(__name__)


def condense(
    config: CondensationConfig,
    *,
    source: EntitySource | None = None,
    sources: CondensingSources | None = None,
) -> PipelineResult[CondensingCollector]:
    """Condense the Wikidata dump into product and organisation collections."""

    config.check()
    effective_sources = sources if sources is not None else load_condensing_sources(config)
    log.info(
        "Starting condensation: dump=%s, language=%s, workers=%s",
        config.wikidata_dump_path,
        config.language,
        config.workers,
    )

    pipeline = ProcessingPipeline(
        source=source or WikidataDumpLoader(config.wikidata_dump_path),
        sources=effective_sources,
        processor=CondensingProcessor(
            sink=JsonCondensedSink(
                products_path=config.target_products_path,
                organisations_path=config.target_organisations_path,
            )
        ),
        config=config,
    )
    result = pipeline.run()

    log.info(
        f"Finished condensation: entities={result.entities}, "
        f"products={len(result.collector.products)}, "
        f"organisations={len(result.collector.organisations)}"
    )
    return result


def build_cache(
    config: CachingConfig,
    *,
    source: EntitySource | None = None,
) -> PipelineResult[CachingCollector]:
    """Traverse the dump once and save the manufacturer/class cache."""

    config.check()
    log.info("Starting cache build: dump=%s", config.wikidata_dump_path)

    pipeline = ProcessingPipeline(
        source=source or WikidataDumpLoader(config.wikidata_dump_path),
        sources=CachingSources(),
        processor=CachingProcessor(sink=JsonCacheSink(config.wikidata_cache_path)),
        config=config,
    )
    result = pipeline.run()

    log.info(
        f"Finished cache build: entities={result.entities}, "
        f"manufacturers={len(result.collector.manufacturer_ids)}, "
        f"classes={len(result.collector.classes)}, saved to {config.wikidata_cache_path}"
    )
    return result
