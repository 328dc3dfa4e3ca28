"""Streaming reader for (optionally compressed) Wikidata JSON dumps."""

from __future__ import annotations

import asyncio
import bz2
import gzip
from dataclasses import dataclass
from itertools import islice
from logging import getLogger
from typing import TYPE_CHECKING, Final

from condenser.domain.errors import DecodeError, SourceReadError, UnsupportedCompressionError

from .translator import parse_entity

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from typing import TextIO

    from condenser.domain.model import Entity
    from condenser.domain.processing import Channel

log = getLogger(__name__)

PLAIN_SUFFIXES: Final[frozenset[str]] = frozenset({".json", ".jsonl", ".ndjson"})
DEFAULT_PROGRESS_INTERVAL: Final[int] = 1_000_000
DEFAULT_BATCH_SIZE: Final[int] = 512


def open_dump(path: Path) -> TextIO:
    """Open ``path`` as text, decompressing according to its suffix."""

    suffix = path.suffix.lower()
    try:
        if suffix == ".gz":
            return gzip.open(path, "rt", encoding="utf-8")
        if suffix == ".bz2":
            return bz2.open(path, "rt", encoding="utf-8")
        if suffix in PLAIN_SUFFIXES:
            return path.open(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(path, exc) from exc
    raise UnsupportedCompressionError(path)


def strip_dump_line(line: str) -> str | None:
    """Return the JSON object on ``line`` or ``None`` for framing/blank lines.

    The official dump is one big JSON array with one entity per line, so the
    first and last lines are brackets and entity lines end with a comma.
    """

    stripped = line.strip()
    if stripped in ("", "[", "]"):
        return None
    return stripped.removesuffix(",")


def iter_entities(path: Path) -> Iterator[Entity]:
    handle = open_dump(path)
    with handle:
        line_number = 0
        try:
            for line_number, line in enumerate(handle, start=1):
                payload = strip_dump_line(line)
                if payload is None:
                    continue
                yield parse_entity(payload, line=line_number)
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 in '{path}'", line=line_number + 1) from exc
        except (OSError, EOFError) as exc:
            raise SourceReadError(path, exc) from exc


def _next_batch(entities: Iterator[Entity], size: int) -> list[Entity]:
    return list(islice(entities, size))


@dataclass(slots=True)
class WikidataDumpLoader:
    """Sole producer of a run: sends every dump entity on the channel.

    Decompression and decoding happen in a worker thread, one batch at a time,
    so the event loop keeps serving the handling tasks in the meantime.
    """

    path: Path
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    batch_size: int = DEFAULT_BATCH_SIZE

    async def run(self, channel: Channel[Entity]) -> int:
        log.info("Reading Wikidata dump from %s", self.path)
        entities = iter_entities(self.path)
        count = 0
        while batch := await asyncio.to_thread(_next_batch, entities, self.batch_size):
            for entity in batch:
                await channel.send(entity)
                count += 1
                if count % self.progress_interval == 0:
                    log.info("Read %s entities so far", count)
        return count
