"""Streaming producer/worker pipeline shared by every processing run."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from condenser.domain.errors import CondenserError, PipelineError, WorkerError

from .channel import Channel, ChannelDrained

if TYPE_CHECKING:
    from collections.abc import Sequence

    from condenser.domain.model import Entity
    from condenser.domain.ports import Collector, EntitySource, PipelineConfig, Processor

log = getLogger(__name__)

STAGE_READING = "reading"
STAGE_HANDLING = "handling"
STAGE_FINALIZING = "finalizing"


@dataclass(slots=True)
class PipelineResult[CollectorT]:
    """Outcome of a completed run."""

    entities: int
    collector: CollectorT


def merge_collectors[CollectorT: Collector](
    collectors: Sequence[CollectorT], empty: CollectorT
) -> CollectorT:
    """Fold ``collectors`` into ``empty`` from left to right."""

    for collector in collectors:
        empty.merge(collector)
    return empty


def _first_error(group: BaseExceptionGroup[BaseException]) -> BaseException:
    first = group.exceptions[0]
    if isinstance(first, BaseExceptionGroup):
        return _first_error(first)
    return first


@dataclass(slots=True)
class ProcessingPipeline[ConfigT: PipelineConfig, SourcesT, CollectorT: Collector]:
    """Read entities once, handle them concurrently, merge, then finalize once.

    One producer task feeds ``config.workers`` worker tasks through a bounded
    channel. Each worker owns its collector, so handling needs no locks. The
    first failure anywhere cancels the remaining tasks and is reported as a
    single ``PipelineError`` naming the stage it happened in.
    """

    source: EntitySource
    sources: SourcesT
    processor: Processor[ConfigT, SourcesT, CollectorT]
    config: ConfigT

    def run(self) -> PipelineResult[CollectorT]:
        result = self.collect()
        log.info("Finalizing after %s entities", result.entities)
        try:
            self.processor.finalize(result.collector, self.sources, self.config)
        except Exception as exc:
            raise PipelineError(STAGE_FINALIZING, exc) from exc
        return result

    def collect(self) -> PipelineResult[CollectorT]:
        """Run the streaming part only and return the merged collector."""

        return asyncio.run(self._collect())

    async def _collect(self) -> PipelineResult[CollectorT]:
        channel: Channel[Entity] = Channel(self.config.channel_capacity)
        log.info(
            "Starting pipeline: workers=%s, channel_capacity=%s",
            self.config.workers,
            self.config.channel_capacity,
        )
        try:
            async with asyncio.TaskGroup() as group:
                producer = group.create_task(self._produce(channel))
                workers = [
                    group.create_task(self._consume(channel, index))
                    for index in range(self.config.workers)
                ]
        except ExceptionGroup as errors:
            first = _first_error(errors)
            if isinstance(first, PipelineError):
                raise first from first.cause
            raise PipelineError(STAGE_HANDLING, first) from first

        collectors = [worker.result() for worker in workers]
        merged = merge_collectors(collectors, self.processor.new_collector())
        return PipelineResult(entities=producer.result(), collector=merged)

    async def _produce(self, channel: Channel[Entity]) -> int:
        try:
            count = await self.source.run(channel)
        except Exception as exc:
            raise PipelineError(STAGE_READING, exc) from exc
        finally:
            channel.close()
        log.info("Read %s entities", count)
        return count

    async def _consume(self, channel: Channel[Entity], index: int) -> CollectorT:
        collector = self.processor.new_collector()
        handled = 0
        while True:
            try:
                entity = await channel.receive()
            except ChannelDrained:
                break
            try:
                self.processor.handle_entity(entity, self.sources, collector, self.config)
            except CondenserError as exc:
                raise PipelineError(STAGE_HANDLING, exc) from exc
            except Exception as exc:
                error = WorkerError(f"Worker {index} terminated abnormally: {exc!r}")
                raise PipelineError(STAGE_HANDLING, error) from exc
            handled += 1
            # Let the producer and the other workers run between entities.
            await asyncio.sleep(0)
        log.debug("Worker %s handled %s entities", index, handled)
        return collector
