"""Capability contracts implemented by concrete processing runs.

A run is assembled from three collaborating roles rather than a class
hierarchy: an ``EntitySource`` producing entities onto a channel, a
``Processor`` that folds each entity into a worker-private ``Collector`` and
finalizes the merged result, and the ``Collector`` itself, which must merge
associatively so per-worker results can be combined in any grouping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from condenser.domain.model import Entity
    from condenser.domain.processing.channel import Channel


class PipelineConfig(Protocol):
    """Tuning knobs every processing config exposes."""

    @property
    def workers(self) -> int: ...

    @property
    def channel_capacity(self) -> int: ...


@runtime_checkable
class Collector(Protocol):
    """Worker-private accumulator that can absorb another one."""

    def merge(self, other: Self) -> None: ...


class EntitySource(Protocol):
    """The single producer of a run."""

    async def run(self, channel: Channel[Entity]) -> int:
        """Send every entity on ``channel`` and return how many were produced."""
        ...


class Processor[ConfigT: PipelineConfig, SourcesT, CollectorT: Collector](Protocol):
    """Per-entity handling and the final whole-dataset pass."""

    def new_collector(self) -> CollectorT: ...

    def handle_entity(
        self,
        entity: Entity,
        sources: SourcesT,
        collector: CollectorT,
        config: ConfigT,
    ) -> None: ...

    def finalize(self, collector: CollectorT, sources: SourcesT, config: ConfigT) -> None: ...


__all__ = ["Collector", "EntitySource", "PipelineConfig", "Processor"]
