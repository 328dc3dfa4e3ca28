"""Domain port definitions for adapters and processors."""

from __future__ import annotations

from .processing import Collector, EntitySource, PipelineConfig, Processor

__all__ = ["Collector", "EntitySource", "PipelineConfig", "Processor"]
