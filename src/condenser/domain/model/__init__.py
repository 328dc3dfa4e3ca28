"""Pure domain model for the condenser."""

from __future__ import annotations

from .entity import (
    FOLLOWED_BY,
    FOLLOWS,
    INSTANCE_OF,
    MANUFACTURER,
    OFFICIAL_WEBSITE,
    SUBCLASS_OF,
    Entity,
    Item,
    Property,
    parse_item_id,
)
from .knowledge import Category, Certifications, Id, Organisation, Product

__all__ = [
    "FOLLOWED_BY",
    "FOLLOWS",
    "INSTANCE_OF",
    "MANUFACTURER",
    "OFFICIAL_WEBSITE",
    "SUBCLASS_OF",
    "Category",
    "Certifications",
    "Entity",
    "Id",
    "Item",
    "Organisation",
    "Product",
    "Property",
    "parse_item_id",
]
