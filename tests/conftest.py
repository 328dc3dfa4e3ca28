from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers.workspace import Workspace

if TYPE_CHECKING:
    from pathlib import Path

_ENV_NAMES = (
    "CONDENSER_WIKIDATA_DUMP",
    "CONDENSER_ORIGIN_DIR",
    "CONDENSER_CACHE_DIR",
    "CONDENSER_TARGET_DIR",
    "CONDENSER_LANGUAGE",
    "CONDENSER_WORKERS",
)


@pytest.fixture(autouse=True)
def clean_condenser_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    return Workspace.create(tmp_path)
