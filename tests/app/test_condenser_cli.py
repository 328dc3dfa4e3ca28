from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from condenser.config import CachingConfig, CondensationConfig
from condenser.domain.errors import PipelineError, SourceReadError
from condenser.ui import cli as cli_module

if TYPE_CHECKING:
    from tests.helpers.workspace import Workspace


def _condense_args(workspace: Workspace, *extra: str) -> list[str]:
    return [
        "condense",
        "--wikidata-dump",
        str(workspace.dump_path),
        "--origin-dir",
        str(workspace.origin_dir),
        "--cache-dir",
        str(workspace.cache_dir),
        "--target-dir",
        str(workspace.target_dir),
        *extra,
    ]


def test_condense_command_builds_config(
    monkeypatch: pytest.MonkeyPatch, workspace: Workspace
) -> None:
    captured: list[CondensationConfig] = []

    def fake_condense(config: CondensationConfig) -> None:
        captured.append(config)

    monkeypatch.setattr(cli_module, "condense", fake_condense)

    cli_module.main(_condense_args(workspace, "--language", "de", "--workers", "3"))

    [config] = captured
    assert config.wikidata_dump_path == workspace.dump_path
    assert config.bcorp_path == workspace.origin_dir / "bcorp.csv"
    assert config.target_products_path == workspace.target_dir / "products.json"
    assert config.language == "de"
    assert config.workers == 3


def test_condense_command_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[CondensationConfig] = []
    monkeypatch.setattr(cli_module, "condense", captured.append)
    monkeypatch.setenv("CONDENSER_WIKIDATA_DUMP", "/data/dump.json.gz")
    monkeypatch.setenv("CONDENSER_ORIGIN_DIR", "/data/origin")
    monkeypatch.setenv("CONDENSER_CACHE_DIR", "/data/cache")
    monkeypatch.setenv("CONDENSER_TARGET_DIR", "/data/target")
    monkeypatch.setenv("CONDENSER_WORKERS", "5")

    cli_module.main(["condense"])

    [config] = captured
    assert config.wikidata_dump_path == Path("/data/dump.json.gz")
    assert config.wikidata_cache_path == Path("/data/cache/wikidata.json")
    assert config.language == "en"
    assert config.workers == 5


def test_cache_command_builds_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: list[CachingConfig] = []
    monkeypatch.setattr(cli_module, "build_cache", captured.append)

    cli_module.main(
        ["cache", "--wikidata-dump", str(tmp_path / "dump.json"), "--cache-dir", str(tmp_path)]
    )

    [config] = captured
    assert config.wikidata_cache_path == tmp_path / "wikidata.json"


def test_missing_configuration_exits_with_code_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "condense", lambda _config: None)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["condense"])

    assert excinfo.value.code == 2


def test_failed_run_exits_with_code_1(
    monkeypatch: pytest.MonkeyPatch, workspace: Workspace, caplog: pytest.LogCaptureFixture
) -> None:
    def failing_condense(_config: CondensationConfig) -> None:
        raise PipelineError("reading", SourceReadError(Path("dump.json"), OSError("boom")))

    monkeypatch.setattr(cli_module, "condense", failing_condense)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(_condense_args(workspace))

    assert excinfo.value.code == 1
    assert "Fatal error during condense" in caplog.text


@pytest.mark.parametrize("workers", ["0", "many"])
def test_invalid_workers_argument_is_rejected(workers: str, workspace: Workspace) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(_condense_args(workspace, "--workers", workers))

    assert excinfo.value.code == 2


def test_missing_command_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
