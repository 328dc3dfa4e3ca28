"""Translate Wikidata dump payloads into domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from condenser.domain.errors import DecodeError
from condenser.domain.model import Entity, Item, Property

from .schema import ENTITY_PAYLOAD_ADAPTER, EntityIdValue, ItemPayload, PropertyPayload

if TYPE_CHECKING:
    from .schema import DataValuePayload, StatementPayload, TermPayload

_ENTITY_PREFIXES: Final[dict[str, str]] = {
    "item": "Q",
    "property": "P",
    "lexeme": "L",
}


def _terms(terms: dict[str, TermPayload]) -> dict[str, str]:
    return {language: term.value for language, term in terms.items()}


def _entity_id(value: object) -> str | None:
    reference = EntityIdValue.model_validate(value)
    if reference.id:
        return reference.id
    prefix = _ENTITY_PREFIXES.get(reference.entity_type)
    if prefix is None or reference.numeric_id is None:
        return None
    return f"{prefix}{reference.numeric_id}"


def _datavalue_to_str(datavalue: DataValuePayload) -> str | None:
    match datavalue.type:
        case "wikibase-entityid":
            return _entity_id(datavalue.value)
        case "string" if isinstance(datavalue.value, str):
            return datavalue.value
        case _:
            return None


def _claim_values(statements: list[StatementPayload]) -> tuple[str, ...]:
    values: list[str] = []
    for statement in statements:
        if statement.rank == "deprecated":
            continue
        snak = statement.mainsnak
        if snak.snaktype != "value" or snak.datavalue is None:
            continue
        value = _datavalue_to_str(snak.datavalue)
        if value is not None:
            values.append(value)
    return tuple(values)


def _claims(claims: dict[str, list[StatementPayload]]) -> dict[str, tuple[str, ...]]:
    result: dict[str, tuple[str, ...]] = {}
    for property_id, statements in claims.items():
        values = _claim_values(statements)
        if values:
            result[property_id] = values
    return result


def translate_entity(payload: ItemPayload | PropertyPayload) -> Entity:
    match payload:
        case ItemPayload():
            return Item(
                id=payload.id,
                labels=_terms(payload.labels),
                descriptions=_terms(payload.descriptions),
                claims=_claims(payload.claims),
            )
        case PropertyPayload():
            return Property(
                id=payload.id,
                labels=_terms(payload.labels),
                descriptions=_terms(payload.descriptions),
                claims=_claims(payload.claims),
                datatype=payload.datatype,
            )


def parse_entity(raw: str | bytes, *, line: int | None = None) -> Entity:
    """Decode one serialized entity."""

    try:
        payload = ENTITY_PAYLOAD_ADAPTER.validate_json(raw)
        return translate_entity(payload)
    except ValidationError as exc:
        errors = exc.error_count()
        raise DecodeError(f"Malformed entity ({errors} validation errors)", line=line) from exc
