"""Condensation of Wikidata entities into products and organisations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from operator import attrgetter
from typing import TYPE_CHECKING, Protocol, assert_never

from condenser.domain.advisors import (
    BCorpAdvisor,
    FashionTransparencyIndexAdvisor,
    TcoAdvisor,
    WikidataCache,
)
from condenser.domain.categories import categorize
from condenser.domain.domains import extract_domains
from condenser.domain.model import Certifications, Item, Organisation, Product, Property

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from condenser.config import CondensationConfig
    from condenser.domain.model import Entity, Id

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CondensingSources:
    """All auxiliary indices consulted while handling entities."""

    cache: WikidataCache = field(default_factory=WikidataCache)
    bcorp: BCorpAdvisor = field(default_factory=BCorpAdvisor)
    tco: TcoAdvisor = field(default_factory=TcoAdvisor)
    fti: FashionTransparencyIndexAdvisor = field(default_factory=FashionTransparencyIndexAdvisor)


@dataclass(slots=True)
class CondensingCollector:
    """Products and organisations gathered by one worker."""

    products: list[Product] = field(default_factory=list[Product])
    organisations: list[Organisation] = field(default_factory=list[Organisation])

    def add_product(self, product: Product) -> None:
        self.products.append(product)

    def add_organisation(self, organisation: Organisation) -> None:
        self.organisations.append(organisation)

    def merge(self, other: CondensingCollector) -> None:
        self.products.extend(other.products)
        self.organisations.extend(other.organisations)


class CondensedSink(Protocol):
    """Destination of the two final collections."""

    def write(
        self, *, products: Sequence[Product], organisations: Sequence[Organisation]
    ) -> None: ...


def is_organisation(item: Item, sources: CondensingSources) -> bool:
    return sources.cache.has_manufacturer_id(item.id) or item.has_official_website()


def build_product(item: Item, *, name: str, description: str) -> Product:
    return Product(
        id=item.id,
        name=name,
        description=description,
        category=categorize(item),
        manufacturer_ids=tuple(dict.fromkeys(item.manufacturer_ids())),
        follows=item.follows(),
        followed_by=item.followed_by(),
    )


def build_organisation(
    item: Item, sources: CondensingSources, *, name: str, description: str
) -> Organisation:
    websites = tuple(dict.fromkeys(item.official_websites()))
    domains = extract_domains(websites)
    return Organisation(
        id=item.id,
        name=name,
        description=description,
        websites=websites,
        certifications=Certifications(
            bcorp=sources.bcorp.has_domains(domains),
            tco=sources.tco.has_company(item.id),
            fti=sources.fti.get_score(item.id),
        ),
    )


def collect_certifications(organisations: Iterable[Organisation]) -> dict[Id, Certifications]:
    """Index certifications by organisation id, merging repeated ids."""

    index: dict[Id, Certifications] = {}
    for organisation in organisations:
        existing = index.get(organisation.id)
        if existing is None:
            index[organisation.id] = organisation.certifications
        else:
            index[organisation.id] = existing.merged(organisation.certifications)
    return index


def propagate_certifications(
    products: Iterable[Product], organisations: Iterable[Organisation]
) -> list[Product]:
    """Return copies of ``products`` carrying their manufacturers' certifications."""

    certifications = collect_certifications(organisations)
    result: list[Product] = []
    for product in products:
        merged = replace(product.certifications)
        for manufacturer_id in product.manufacturer_ids:
            found = certifications.get(manufacturer_id)
            if found is not None:
                merged.merge(found)
        result.append(replace(product, certifications=merged))
    return result


@dataclass(slots=True)
class CondensingProcessor:
    """Classifies entities into products and organisations.

    Organisation certifications are resolved from the advisors while handling;
    product certifications are resolved only in ``finalize``, once every
    organisation of the dump has been seen.
    """

    sink: CondensedSink

    def new_collector(self) -> CondensingCollector:
        return CondensingCollector()

    def handle_entity(
        self,
        entity: Entity,
        sources: CondensingSources,
        collector: CondensingCollector,
        config: CondensationConfig,
    ) -> None:
        match entity:
            case Item():
                self._handle_item(entity, sources, collector, config.language)
            case Property():
                pass
            case _:
                assert_never(entity)

    def _handle_item(
        self,
        item: Item,
        sources: CondensingSources,
        collector: CondensingCollector,
        language: str,
    ) -> None:
        name = item.label(language)
        if name is None:
            return
        description = item.description(language) or ""

        if item.manufacturer_ids():
            collector.add_product(build_product(item, name=name, description=description))

        if is_organisation(item, sources):
            collector.add_organisation(
                build_organisation(item, sources, name=name, description=description)
            )

    def finalize(
        self,
        collector: CondensingCollector,
        sources: CondensingSources,
        config: CondensationConfig,
    ) -> None:
        _ = (sources, config)
        by_id = attrgetter("id")
        products = sorted(
            propagate_certifications(collector.products, collector.organisations), key=by_id
        )
        organisations = sorted(collector.organisations, key=by_id)
        log.info(
            "Condensed %s products and %s organisations", len(products), len(organisations)
        )
        self.sink.write(products=products, organisations=organisations)
