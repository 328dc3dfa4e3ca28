"""Shared helpers for reading auxiliary datasets."""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError

from condenser.domain.errors import DecodeError, SourceReadError

if TYPE_CHECKING:
    from pathlib import Path


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, exc) from exc


def read_csv_records[TModel: BaseModel](path: Path, model: type[TModel]) -> list[TModel]:
    """Validate every row of a headed CSV file as ``model``."""

    records: list[TModel] = []
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            for row in reader:
                try:
                    records.append(model.model_validate(row))
                except ValidationError as exc:
                    raise DecodeError(
                        f"Invalid record in '{path}': {exc.error_count()} validation errors",
                        line=reader.line_num,
                    ) from exc
    except csv.Error as exc:
        raise DecodeError(f"Invalid CSV in '{path}': {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, exc) from exc
    return records


def read_yaml_records[TModel: BaseModel](path: Path, model: type[TModel]) -> list[TModel]:
    """Validate a YAML list of mappings as ``model`` records."""

    try:
        payload = yaml.safe_load(read_text(path))
    except yaml.YAMLError as exc:
        raise DecodeError(f"Invalid YAML in '{path}': {exc}") from exc
    if payload is None:
        return []
    try:
        return TypeAdapter(list[model]).validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"Invalid records in '{path}': {exc.error_count()} validation errors"
        ) from exc
