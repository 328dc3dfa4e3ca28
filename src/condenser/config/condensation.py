"""Configuration for the condensation and cache-building runs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigCheckError, ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_LANGUAGE: Final[str] = "en"
DEFAULT_CHANNEL_CAPACITY: Final[int] = 1024

WIKIDATA_CACHE_FILENAME: Final[str] = "wikidata.json"
BCORP_FILENAME: Final[str] = "bcorp.csv"
TCO_FILENAME: Final[str] = "tco.yaml"
FTI_FILENAME: Final[str] = "fashion_transparency_index.csv"
FTI_MATCHES_FILENAME: Final[str] = "fashion_transparency_index_matches.yaml"
PRODUCTS_FILENAME: Final[str] = "products.json"
ORGANISATIONS_FILENAME: Final[str] = "organisations.json"

ORIGIN_DIR_ENV: Final[str] = "CONDENSER_ORIGIN_DIR"
CACHE_DIR_ENV: Final[str] = "CONDENSER_CACHE_DIR"
TARGET_DIR_ENV: Final[str] = "CONDENSER_TARGET_DIR"
DUMP_PATH_ENV: Final[str] = "CONDENSER_WIKIDATA_DUMP"
LANGUAGE_ENV: Final[str] = "CONDENSER_LANGUAGE"
WORKERS_ENV: Final[str] = "CONDENSER_WORKERS"


def default_workers() -> int:
    return os.cpu_count() or 1


def _validate_pipeline_settings(workers: int, channel_capacity: int) -> None:
    if workers < 1:
        raise ConfigurationError(f"Number of workers must be positive, got {workers}")
    if channel_capacity < 1:
        raise ConfigurationError(f"Channel capacity must be positive, got {channel_capacity}")


def check_file_exists(path: Path) -> None:
    if not path.exists():
        raise ConfigCheckError("Path does not exist", path=path)
    if not path.is_file():
        raise ConfigCheckError("Path is not a file", path=path)


def check_dir_exists(path: Path) -> None:
    if not path.exists():
        raise ConfigCheckError("Path does not exist", path=path)
    if not path.is_dir():
        raise ConfigCheckError("Path is not a directory", path=path)


def check_dir_if_present(path: Path) -> None:
    if path.exists() and not path.is_dir():
        raise ConfigCheckError("Path is not a directory", path=path)


@dataclass(frozen=True, slots=True)
class CondensationConfig:
    """Paths and tuning knobs for one condensation run."""

    wikidata_dump_path: Path
    wikidata_cache_path: Path
    bcorp_path: Path
    tco_path: Path
    fti_path: Path
    fti_matches_path: Path
    target_products_path: Path
    target_organisations_path: Path
    language: str = DEFAULT_LANGUAGE
    workers: int = field(default_factory=default_workers)
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY

    def __post_init__(self) -> None:
        _validate_pipeline_settings(self.workers, self.channel_capacity)
        if not self.language.strip():
            raise ConfigurationError("Language code must not be blank")

    @classmethod
    def from_dirs(
        cls,
        *,
        dump_path: Path,
        origin_dir: Path,
        cache_dir: Path,
        target_dir: Path,
        language: str = DEFAULT_LANGUAGE,
        workers: int | None = None,
        channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
    ) -> CondensationConfig:
        return cls(
            wikidata_dump_path=dump_path,
            wikidata_cache_path=cache_dir / WIKIDATA_CACHE_FILENAME,
            bcorp_path=origin_dir / BCORP_FILENAME,
            tco_path=origin_dir / TCO_FILENAME,
            fti_path=origin_dir / FTI_FILENAME,
            fti_matches_path=origin_dir / FTI_MATCHES_FILENAME,
            target_products_path=target_dir / PRODUCTS_FILENAME,
            target_organisations_path=target_dir / ORGANISATIONS_FILENAME,
            language=language,
            workers=workers if workers is not None else default_workers(),
            channel_capacity=channel_capacity,
        )

    def check(self) -> None:
        """Validate paths before any data is read."""

        check_file_exists(self.wikidata_dump_path)
        check_dir_if_present(self.wikidata_cache_path.parent)
        check_dir_if_present(self.bcorp_path.parent)
        check_dir_exists(self.target_products_path.parent)
        check_dir_exists(self.target_organisations_path.parent)


@dataclass(frozen=True, slots=True)
class CachingConfig:
    """Paths and tuning knobs for building the Wikidata cache."""

    wikidata_dump_path: Path
    wikidata_cache_path: Path
    workers: int = field(default_factory=default_workers)
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY

    def __post_init__(self) -> None:
        _validate_pipeline_settings(self.workers, self.channel_capacity)

    def check(self) -> None:
        check_file_exists(self.wikidata_dump_path)
        check_dir_exists(self.wikidata_cache_path.parent)


def _resolve_paths(pairs: Sequence[tuple[Path | None, str]]) -> list[Path]:
    """Return explicit paths, reading the named env vars for the ones left out."""

    values = require_env_vars([env_name for value, env_name in pairs if value is None])
    return [
        value if value is not None else Path(values[env_name]).expanduser()
        for value, env_name in pairs
    ]


def get_condensation_config(
    *,
    dump_path: Path | None = None,
    origin_dir: Path | None = None,
    cache_dir: Path | None = None,
    target_dir: Path | None = None,
    language: str | None = None,
    workers: int | None = None,
) -> CondensationConfig:
    """Build a condensation config from explicit values with environment fallbacks."""

    resolved_dump, resolved_origin, resolved_cache, resolved_target = _resolve_paths(
        (
            (dump_path, DUMP_PATH_ENV),
            (origin_dir, ORIGIN_DIR_ENV),
            (cache_dir, CACHE_DIR_ENV),
            (target_dir, TARGET_DIR_ENV),
        )
    )

    return CondensationConfig.from_dirs(
        dump_path=resolved_dump,
        origin_dir=resolved_origin,
        cache_dir=resolved_cache,
        target_dir=resolved_target,
        language=language or optional_env_var(LANGUAGE_ENV) or DEFAULT_LANGUAGE,
        workers=workers if workers is not None else optional_int_env_var(WORKERS_ENV),
    )


def get_caching_config(
    *,
    dump_path: Path | None = None,
    cache_dir: Path | None = None,
    workers: int | None = None,
) -> CachingConfig:
    """Build a cache-building config from explicit values with environment fallbacks."""

    resolved_dump, resolved_cache = _resolve_paths(
        ((dump_path, DUMP_PATH_ENV), (cache_dir, CACHE_DIR_ENV))
    )

    effective_workers = workers if workers is not None else optional_int_env_var(WORKERS_ENV)
    return CachingConfig(
        wikidata_dump_path=resolved_dump,
        wikidata_cache_path=resolved_cache / WIKIDATA_CACHE_FILENAME,
        workers=effective_workers if effective_workers is not None else default_workers(),
    )
