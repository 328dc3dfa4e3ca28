from __future__ import annotations

from pathlib import Path

import pytest

from condenser.config import (
    CachingConfig,
    CondensationConfig,
    ConfigCheckError,
    ConfigurationError,
    MissingConfigurationError,
    get_caching_config,
    get_condensation_config,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_vars(["EXAMPLE_VAR"])


def test_condensation_config_from_explicit_dirs(tmp_path: Path) -> None:
    config = get_condensation_config(
        dump_path=tmp_path / "dump.json.gz",
        origin_dir=tmp_path / "origin",
        cache_dir=tmp_path / "cache",
        target_dir=tmp_path / "target",
        workers=3,
    )

    assert config.wikidata_cache_path == tmp_path / "cache" / "wikidata.json"
    assert config.bcorp_path == tmp_path / "origin" / "bcorp.csv"
    assert config.fti_matches_path == tmp_path / "origin" / "fashion_transparency_index_matches.yaml"
    assert config.target_products_path == tmp_path / "target" / "products.json"
    assert config.target_organisations_path == tmp_path / "target" / "organisations.json"
    assert config.language == "en"
    assert config.workers == 3


def test_condensation_config_reads_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("CONDENSER_WIKIDATA_DUMP", str(tmp_path / "dump.json"))
    monkeypatch.setenv("CONDENSER_ORIGIN_DIR", str(tmp_path / "origin"))
    monkeypatch.setenv("CONDENSER_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("CONDENSER_TARGET_DIR", str(tmp_path / "target"))
    monkeypatch.setenv("CONDENSER_LANGUAGE", "de")
    monkeypatch.setenv("CONDENSER_WORKERS", "2")

    config = get_condensation_config()

    assert config.wikidata_dump_path == tmp_path / "dump.json"
    assert config.tco_path == tmp_path / "origin" / "tco.yaml"
    assert config.language == "de"
    assert config.workers == 2


def test_condensation_config_lists_every_missing_variable(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        get_condensation_config(dump_path=tmp_path / "dump.json")

    message = str(exc.value)
    assert "CONDENSER_ORIGIN_DIR" in message
    assert "CONDENSER_CACHE_DIR" in message
    assert "CONDENSER_TARGET_DIR" in message
    assert "CONDENSER_WIKIDATA_DUMP" not in message


def test_invalid_workers_value_is_rejected(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("CONDENSER_WORKERS", "many")

    with pytest.raises(ConfigurationError):
        get_caching_config(dump_path=tmp_path / "dump.json", cache_dir=tmp_path)


def test_pipeline_settings_must_be_positive(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        CachingConfig(
            wikidata_dump_path=tmp_path / "dump.json",
            wikidata_cache_path=tmp_path / "wikidata.json",
            workers=0,
        )
    with pytest.raises(ConfigurationError):
        CachingConfig(
            wikidata_dump_path=tmp_path / "dump.json",
            wikidata_cache_path=tmp_path / "wikidata.json",
            channel_capacity=0,
        )


def test_check_accepts_existing_paths(tmp_path: Path) -> None:
    dump = tmp_path / "dump.json"
    dump.write_text("")
    target = tmp_path / "target"
    target.mkdir()

    config = CondensationConfig.from_dirs(
        dump_path=dump,
        origin_dir=tmp_path / "missing-origin",
        cache_dir=tmp_path / "missing-cache",
        target_dir=target,
        workers=1,
    )

    config.check()


def test_check_rejects_missing_dump(tmp_path: Path) -> None:
    config = CondensationConfig.from_dirs(
        dump_path=tmp_path / "dump.json",
        origin_dir=tmp_path,
        cache_dir=tmp_path,
        target_dir=tmp_path,
        workers=1,
    )

    with pytest.raises(ConfigCheckError) as exc:
        config.check()

    assert exc.value.path == tmp_path / "dump.json"
    assert "does not exist" in str(exc.value)


def test_check_rejects_missing_target_dir(tmp_path: Path) -> None:
    dump = tmp_path / "dump.json"
    dump.write_text("")
    config = CondensationConfig.from_dirs(
        dump_path=dump,
        origin_dir=tmp_path,
        cache_dir=tmp_path,
        target_dir=tmp_path / "target",
        workers=1,
    )

    with pytest.raises(ConfigCheckError) as exc:
        config.check()

    assert exc.value.path == tmp_path / "target"


def test_check_rejects_dump_directory(tmp_path: Path) -> None:
    config = CachingConfig(
        wikidata_dump_path=tmp_path,
        wikidata_cache_path=tmp_path / "wikidata.json",
        workers=1,
    )

    with pytest.raises(ConfigCheckError, match="not a file"):
        config.check()
