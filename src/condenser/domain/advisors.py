"""Read-only lookup indices built once from auxiliary certification datasets."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from logging import getLogger

from condenser.domain.domains import extract_domain_from_url
from condenser.domain.errors import RepeatedIdsError
from condenser.domain.model import Id, parse_item_id

log = getLogger(__name__)


def _repeated(values: Iterable[str]) -> list[str]:
    return [value for value, count in Counter(values).items() if count > 1]


@dataclass(frozen=True, slots=True)
class BCorpAdvisor:
    """Domains of companies certified by B Lab."""

    domains: frozenset[str] = field(default_factory=frozenset[str])

    @classmethod
    def from_websites(cls, websites: Iterable[str]) -> BCorpAdvisor:
        domains = {extract_domain_from_url(website) for website in websites}
        domains.discard("")
        return cls(domains=frozenset(domains))

    def has_domains(self, domains: Iterable[str]) -> bool:
        """Check if at least one of ``domains`` belongs to a certified company."""

        return any(domain in self.domains for domain in domains)


@dataclass(frozen=True, slots=True)
class TcoAdvisor:
    """Organisation ids of companies holding a TCO certification."""

    companies: frozenset[Id] = field(default_factory=frozenset[Id])

    @classmethod
    def from_ids(cls, company_ids: Iterable[Id]) -> TcoAdvisor:
        companies: set[Id] = set()
        for company_id in company_ids:
            parse_item_id(company_id)
            companies.add(company_id.strip())
        return cls(companies=frozenset(companies))

    def has_company(self, company_id: Id) -> bool:
        return company_id in self.companies


@dataclass(frozen=True, slots=True)
class FashionTransparencyIndexAdvisor:
    """Fashion Transparency Index scores keyed by organisation id."""

    scores: Mapping[Id, int] = field(default_factory=dict[Id, int])

    @classmethod
    def from_records(
        cls,
        scores: Iterable[tuple[str, int]],
        matches: Iterable[tuple[str, Id]],
    ) -> FashionTransparencyIndexAdvisor:
        """Join ``(name, score)`` rows with ``(name, organisation id)`` matches.

        Names must be unique within each dataset and organisation ids in
        ``matches`` must be well-formed and unique. Every repeated name or id
        is reported in one ``RepeatedIdsError``.
        """

        scored = [(name.strip(), score) for name, score in scores]
        matched = [(name.strip(), wikidata_id.strip()) for name, wikidata_id in matches]
        for _, wikidata_id in matched:
            parse_item_id(wikidata_id)

        repeated = [
            *_repeated(name for name, _ in scored),
            *_repeated(name for name, _ in matched),
            *_repeated(wikidata_id for _, wikidata_id in matched),
        ]
        if repeated:
            raise RepeatedIdsError(repeated)

        score_by_name = dict(scored)
        result: dict[Id, int] = {}
        for name, wikidata_id in matched:
            score = score_by_name.get(name)
            if score is not None:
                result[wikidata_id] = score

        unmatched = len(score_by_name.keys() - {name for name, _ in matched})
        if unmatched:
            log.info("%s Fashion Transparency Index entries have no organisation match", unmatched)
        return cls(scores=result)

    def get_score(self, company_id: Id) -> int | None:
        return self.scores.get(company_id)


@dataclass(frozen=True, slots=True)
class WikidataCache:
    """Ids gathered by a prior traversal of the Wikidata dump."""

    manufacturer_ids: frozenset[Id] = field(default_factory=frozenset[Id])
    classes: frozenset[Id] = field(default_factory=frozenset[Id])

    def has_manufacturer_id(self, entity_id: Id) -> bool:
        return entity_id in self.manufacturer_ids

    def has_class_id(self, class_id: Id) -> bool:
        return class_id in self.classes
