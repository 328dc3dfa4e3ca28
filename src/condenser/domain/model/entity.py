"""Entities read from the Wikidata dump.

An entity is either an ``Item`` (a real node of the graph) or a ``Property``
(a schema definition). Claims are flattened per property id into the values
the condenser cares about: referenced entity ids and plain strings such as URLs.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from condenser.domain.errors import IdParseError

INSTANCE_OF: Final[str] = "P31"
SUBCLASS_OF: Final[str] = "P279"
MANUFACTURER: Final[str] = "P176"
OFFICIAL_WEBSITE: Final[str] = "P856"
FOLLOWS: Final[str] = "P155"
FOLLOWED_BY: Final[str] = "P156"

_ITEM_ID_PATTERN: Final = re.compile(r"Q([1-9][0-9]*)")

type Claims = Mapping[str, tuple[str, ...]]


def parse_item_id(value: str) -> int:
    """Return the numeric part of an item id like ``Q42``."""

    match = _ITEM_ID_PATTERN.fullmatch(value.strip())
    if match is None:
        raise IdParseError(value)
    return int(match.group(1))


@dataclass(frozen=True, slots=True, kw_only=True)
class Item:
    """A regular Wikidata node."""

    id: str
    labels: Mapping[str, str] = field(default_factory=dict[str, str])
    descriptions: Mapping[str, str] = field(default_factory=dict[str, str])
    claims: Claims = field(default_factory=dict[str, tuple[str, ...]])

    def label(self, language: str) -> str | None:
        return self.labels.get(language)

    def description(self, language: str) -> str | None:
        return self.descriptions.get(language)

    def claim_values(self, property_id: str) -> tuple[str, ...]:
        return self.claims.get(property_id, ())

    def manufacturer_ids(self) -> tuple[str, ...]:
        return self.claim_values(MANUFACTURER)

    def official_websites(self) -> tuple[str, ...]:
        return self.claim_values(OFFICIAL_WEBSITE)

    def has_official_website(self) -> bool:
        return bool(self.official_websites())

    def follows(self) -> tuple[str, ...]:
        return self.claim_values(FOLLOWS)

    def followed_by(self) -> tuple[str, ...]:
        return self.claim_values(FOLLOWED_BY)

    def is_instance_of(self, class_id: str) -> bool:
        return class_id in self.claim_values(INSTANCE_OF)

    def class_ids(self) -> tuple[str, ...]:
        """Classes this item is an instance or subclass of."""

        return self.claim_values(INSTANCE_OF) + self.claim_values(SUBCLASS_OF)


@dataclass(frozen=True, slots=True, kw_only=True)
class Property:
    """A Wikidata property definition."""

    id: str
    labels: Mapping[str, str] = field(default_factory=dict[str, str])
    descriptions: Mapping[str, str] = field(default_factory=dict[str, str])
    claims: Claims = field(default_factory=dict[str, tuple[str, ...]])
    datatype: str | None = None


type Entity = Item | Property
