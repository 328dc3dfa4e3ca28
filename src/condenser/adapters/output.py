"""JSON sinks for the condensed collections."""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import suppress
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from condenser.domain.errors import OutputWriteError
from condenser.domain.model import Organisation, Product

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

log = getLogger(__name__)

_PRODUCTS_ADAPTER: TypeAdapter[list[Product]] = TypeAdapter(list[Product])
_ORGANISATIONS_ADAPTER: TypeAdapter[list[Organisation]] = TypeAdapter(list[Organisation])


def _write_temporary(path: Path, data: bytes) -> Path:
    """Write ``data`` next to ``path`` and return the temporary file."""

    try:
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as handle:
            handle.write(data)
            return Path(handle.name)
    except OSError as exc:
        raise OutputWriteError(path, exc) from exc


def _keep_previous(path: Path) -> Path | None:
    """Link the current content of ``path`` to a sibling backup, if there is any."""

    if not path.exists():
        return None
    backup = path.with_name(f".{path.name}.{os.getpid()}.bak")
    backup.unlink(missing_ok=True)
    try:
        os.link(path, backup)
    except OSError:
        shutil.copy2(path, backup)
    return backup


def _restore(replaced: Iterable[tuple[Path | None, Path]]) -> None:
    for backup, target in replaced:
        if backup is None:
            target.unlink(missing_ok=True)
        else:
            os.replace(backup, target)


def _replace_all(pairs: Sequence[tuple[Path, Path]]) -> None:
    """Move every staged file onto its target, or leave all targets as they were."""

    backups: list[tuple[Path | None, Path]] = []
    replaced: list[tuple[Path | None, Path]] = []
    current = pairs[0][1]
    try:
        for _, current in pairs:
            backups.append((_keep_previous(current), current))
        for (temporary, current), previous in zip(pairs, backups, strict=True):
            os.replace(temporary, current)
            replaced.append(previous)
    except OSError as exc:
        _restore(reversed(replaced))
        _discard(temporary for temporary, _ in pairs)
        _discard(backup for backup, _ in backups if backup is not None)
        raise OutputWriteError(current, exc) from exc
    _discard(backup for backup, _ in backups if backup is not None)


def _discard(paths: Iterable[Path]) -> None:
    for path in paths:
        with suppress(FileNotFoundError):
            path.unlink()


def write_atomically(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` without ever exposing a partial file."""

    _replace_all([(_write_temporary(path, data), path)])


@dataclass(frozen=True, slots=True)
class JsonCondensedSink:
    """Writes products and organisations as pretty-printed JSON arrays.

    Both files are staged first and only moved into place once both were
    written. When moving the second file fails, the first one is rolled back
    to its previous content, so the pair on disk never mixes two runs.
    """

    products_path: Path
    organisations_path: Path

    def write(
        self, *, products: Sequence[Product], organisations: Sequence[Organisation]
    ) -> None:
        products_data = _PRODUCTS_ADAPTER.dump_json(list(products), indent=2)
        organisations_data = _ORGANISATIONS_ADAPTER.dump_json(list(organisations), indent=2)

        staged_products = _write_temporary(self.products_path, products_data)
        try:
            staged_organisations = _write_temporary(self.organisations_path, organisations_data)
        except OutputWriteError:
            _discard([staged_products])
            raise
        _replace_all(
            [
                (staged_products, self.products_path),
                (staged_organisations, self.organisations_path),
            ]
        )
        log.info(
            "Saved %s products to %s and %s organisations to %s",
            len(products),
            self.products_path,
            len(organisations),
            self.organisations_path,
        )
