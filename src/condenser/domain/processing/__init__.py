"""Generic streaming pipeline: one producer, N workers, merge, finalize."""

from __future__ import annotations

from .channel import Channel, ChannelDrained
from .pipeline import PipelineResult, ProcessingPipeline, merge_collectors

__all__ = [
    "Channel",
    "ChannelDrained",
    "PipelineResult",
    "ProcessingPipeline",
    "merge_collectors",
]
