from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from app.domain.entities.schedule import Schedule
from app.domain.entities.service_catalog import ServiceCategory, ServiceVariant


@dataclass(frozen=True)
class KnowledgeBase:
    services: tuple[ServiceCategory, ...] = field(default_factory=tuple)
    schedule: Schedule = field(default_factory=Schedule)

    @property
    def category_names(self) -> list[str]:
        return [s.category for s in self.services]

    def find_category(self, terms: Iterable[str]) -> ServiceCategory | None:
        """First category (in catalog order) whose name or variant names contain any term."""
        terms = [t for t in terms if t]
        for category in self.services:
            if any(category.matches(term) for term in terms):
                return category
        return None

    def find_variant(self, terms: Iterable[str]) -> tuple[ServiceCategory, ServiceVariant] | None:
        terms = [t.lower() for t in terms if t]
        for category in self.services:
            for variant in category.variants:
                name = variant.name.lower()
                if any(term in name for term in terms):
                    return category, variant
        return None

    def all_prices(self) -> list[float]:
        prices: list[float] = []
        for category in self.services:
            if category.variants:
                prices.extend(category.variant_prices())
            elif category.flat_price is not None:
                prices.append(category.flat_price)
        return prices


@dataclass(frozen=True)
class PatternTable:
    # Insertion order is preserved; phrases are matched as lower-cased substrings.
    patterns: dict[str, tuple[str, ...]] = field(default_factory=dict)
    responses: dict[str, dict[str, str]] = field(default_factory=dict)

    def phrases_for(self, intent_type: str) -> tuple[str, ...]:
        return self.patterns.get(intent_type, ())

    def response_for(self, intent_type: str, language: str) -> str | None:
        bucket = self.responses.get(intent_type) or {}
        return bucket.get(language) or bucket.get("en")


@dataclass(frozen=True)
class NlpContext:
    """Read-only snapshot shared by the classifier and the reply generator."""

    kb: KnowledgeBase
    patterns: PatternTable
