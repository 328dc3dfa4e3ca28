"""Pydantic models describing one entity line of the Wikidata JSON dump."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

Rank = Literal["preferred", "normal", "deprecated"]


def _empty_list_to_dict(value: object) -> object:
    # Wikibase serializes empty maps as ``[]``.
    if isinstance(value, list) and not value:
        return {}
    return value


class WikidataBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TermPayload(WikidataBaseModel):
    language: str
    value: str


class EntityIdValue(WikidataBaseModel):
    entity_type: str = Field(default="item", alias="entity-type")
    numeric_id: int | None = Field(default=None, alias="numeric-id")
    id: str | None = None


class DataValuePayload(WikidataBaseModel):
    type: str
    value: object = None


class SnakPayload(WikidataBaseModel):
    snaktype: Literal["value", "somevalue", "novalue"]
    property: str
    datavalue: DataValuePayload | None = None


class StatementPayload(WikidataBaseModel):
    mainsnak: SnakPayload
    rank: Rank = "normal"


class _EntityPayload(WikidataBaseModel):
    id: str
    labels: dict[str, TermPayload] = Field(default_factory=dict[str, TermPayload])
    descriptions: dict[str, TermPayload] = Field(default_factory=dict[str, TermPayload])
    claims: dict[str, list[StatementPayload]] = Field(
        default_factory=dict[str, list[StatementPayload]]
    )

    _normalize_maps = field_validator("labels", "descriptions", "claims", mode="before")(
        _empty_list_to_dict
    )


class ItemPayload(_EntityPayload):
    type: Literal["item"]


class PropertyPayload(_EntityPayload):
    type: Literal["property"]
    datatype: str | None = None


EntityPayload = Annotated[ItemPayload | PropertyPayload, Field(discriminator="type")]

ENTITY_PAYLOAD_ADAPTER: TypeAdapter[ItemPayload | PropertyPayload] = TypeAdapter(EntityPayload)
