"""Fixed product taxonomy keyed by Wikidata class ids."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from condenser.domain.model import Category, Id, Item

SMARTPHONE_MODEL: Final[Id] = "Q19723451"

CATEGORY_CLASSES: Final[Mapping[Id, Category]] = MappingProxyType(
    {
        SMARTPHONE_MODEL: Category.SMARTPHONE,
    }
)


def categorize(item: Item) -> Category | None:
    """Return the category of the first taxonomy class ``item`` is an instance of."""

    for class_id in CATEGORY_CLASSES:
        if item.is_instance_of(class_id):
            return CATEGORY_CLASSES[class_id]
    return None
