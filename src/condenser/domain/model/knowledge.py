"""Condensed knowledge records written to the output collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

type Id = str


class Category(StrEnum):
    SMARTPHONE = "smartphone"


def _merge_scores(left: int | None, right: int | None) -> int | None:
    if left is None:
        return right
    if right is None:
        return left
    return max(left, right)


@dataclass(slots=True)
class Certifications:
    """Certification facts about an organisation or a product.

    Merging is commutative and associative: flags are OR-ed together and the
    transparency score keeps the maximum of the scores that are present.
    """

    bcorp: bool = False
    tco: bool = False
    fti: int | None = None

    def merge(self, other: Certifications) -> None:
        self.bcorp = self.bcorp or other.bcorp
        self.tco = self.tco or other.tco
        self.fti = _merge_scores(self.fti, other.fti)

    def merged(self, other: Certifications) -> Certifications:
        result = Certifications(bcorp=self.bcorp, tco=self.tco, fti=self.fti)
        result.merge(other)
        return result


@dataclass(slots=True, kw_only=True)
class Product:
    id: Id
    name: str
    description: str = ""
    category: Category | None = None
    manufacturer_ids: tuple[Id, ...] = ()
    follows: tuple[Id, ...] = ()
    followed_by: tuple[Id, ...] = ()
    certifications: Certifications = field(default_factory=Certifications)


@dataclass(slots=True, kw_only=True)
class Organisation:
    id: Id
    name: str
    description: str = ""
    websites: tuple[str, ...] = ()
    certifications: Certifications = field(default_factory=Certifications)
