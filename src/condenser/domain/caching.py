"""Traversal of the Wikidata dump producing the manufacturer/class cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, assert_never

from condenser.domain.advisors import WikidataCache
from condenser.domain.model import Item, Property

if TYPE_CHECKING:
    from condenser.config import CachingConfig
    from condenser.domain.model import Entity, Id

log = getLogger(__name__)


@dataclass(slots=True)
class CachingCollector:
    manufacturer_ids: set[Id] = field(default_factory=set[str])
    classes: set[Id] = field(default_factory=set[str])

    def merge(self, other: CachingCollector) -> None:
        self.manufacturer_ids |= other.manufacturer_ids
        self.classes |= other.classes

    def to_cache(self) -> WikidataCache:
        return WikidataCache(
            manufacturer_ids=frozenset(self.manufacturer_ids), classes=frozenset(self.classes)
        )


class CacheSink(Protocol):
    def write(self, cache: WikidataCache) -> None: ...


@dataclass(frozen=True, slots=True)
class CachingSources:
    """The cache traversal consults no auxiliary data."""


@dataclass(slots=True)
class CachingProcessor:
    """Collects every referenced manufacturer id and class id."""

    sink: CacheSink

    def new_collector(self) -> CachingCollector:
        return CachingCollector()

    def handle_entity(
        self,
        entity: Entity,
        sources: CachingSources,
        collector: CachingCollector,
        config: CachingConfig,
    ) -> None:
        _ = (sources, config)
        match entity:
            case Item():
                collector.manufacturer_ids.update(entity.manufacturer_ids())
                collector.classes.update(entity.class_ids())
            case Property():
                pass
            case _:
                assert_never(entity)

    def finalize(
        self, collector: CachingCollector, sources: CachingSources, config: CachingConfig
    ) -> None:
        _ = (sources, config)
        log.info(
            "Found %s manufacturers and %s classes",
            len(collector.manufacturer_ids),
            len(collector.classes),
        )
        self.sink.write(collector.to_cache())
