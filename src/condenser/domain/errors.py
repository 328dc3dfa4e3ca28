"""Error taxonomy for the condensation pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class CondenserError(RuntimeError):
    """Base class for every failure raised by the condenser."""


class SourceReadError(CondenserError):
    """Raised when an input file cannot be opened or read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to read '{path}': {cause}")
        self.path = path


class OutputWriteError(CondenserError):
    """Raised when an output file cannot be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to write '{path}': {cause}")
        self.path = path


class DecodeError(CondenserError):
    """Raised when a record cannot be decoded."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"{message}{location}")
        self.line = line


class UnsupportedCompressionError(DecodeError):
    """Raised when the compression method of a dump cannot be determined."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unknown compression method for '{path}'")
        self.path = path


class IdParseError(DecodeError):
    """Raised when a Wikidata identifier is malformed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Malformed Wikidata ID: {value!r}")
        self.value = value


class SourcesCheckError(CondenserError):
    """Raised when auxiliary data fails validation."""


class RepeatedIdsError(SourcesCheckError):
    """Raised when identifiers expected to be unique are repeated."""

    def __init__(self, ids: Iterable[str]) -> None:
        self.ids = tuple(sorted(set(ids)))
        super().__init__(f"Repeated IDs: {', '.join(self.ids)}")


class ChannelClosedError(CondenserError):
    """Raised when sending on a closed channel."""


class WorkerError(CondenserError):
    """Raised when a worker task terminates abnormally."""


class PipelineError(CondenserError):
    """Single error reported for a failed run, naming the failing stage."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"Pipeline failed while {stage}: {cause}")
        self.stage = stage
        self.cause = cause
