from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceVariant:
    name: str
    description: str = ""
    price_original_eur: float | None = None
    price_discounted_eur: float | None = None
    duration: str | None = None

    @property
    def price(self) -> float | None:
        if self.price_discounted_eur is not None:
            return self.price_discounted_eur
        return self.price_original_eur


@dataclass(frozen=True)
class ServiceCategory:
    category: str
    url: str = ""
    variants: tuple[ServiceVariant, ...] = field(default_factory=tuple)
    price_original: float | None = None
    price_discounted: float | None = None
    duration: str | None = None

    @property
    def flat_price(self) -> float | None:
        """Category-level price, used when the category has no variants."""
        if self.price_discounted is not None:
            return self.price_discounted
        return self.price_original

    def variant_prices(self) -> list[float]:
        return [v.price for v in self.variants if v.price is not None]

    def matches(self, term: str) -> bool:
        needle = term.lower()
        if needle in self.category.lower():
            return True
        return any(needle in v.name.lower() for v in self.variants)
