from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.entities.knowledge_base import KnowledgeBase, PatternTable
from app.domain.entities.schedule import (
    Location,
    Parking,
    ParkingOption,
    PublicTransport,
    Schedule,
    TransitLine,
)
from app.domain.entities.service_catalog import ServiceCategory, ServiceVariant


class _FileModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ServiceVariantDTO(_FileModel):
    name: str
    description: str = ""
    price_original_eur: float | None = Field(default=None, ge=0)
    price_discounted_eur: float | None = Field(default=None, ge=0)
    duration: str | None = None

    def to_entity(self) -> ServiceVariant:
        return ServiceVariant(
            name=self.name,
            description=self.description,
            price_original_eur=self.price_original_eur,
            price_discounted_eur=self.price_discounted_eur,
            duration=self.duration,
        )


class ServiceCategoryDTO(_FileModel):
    category: str
    url: str = ""
    variants: list[ServiceVariantDTO] = Field(default_factory=list)
    price_original_eur: float | None = Field(default=None, ge=0)
    price_discounted_eur: float | None = Field(default=None, ge=0)
    duration: str | None = None

    def to_entity(self) -> ServiceCategory:
        return ServiceCategory(
            category=self.category,
            url=self.url,
            variants=tuple(v.to_entity() for v in self.variants),
            price_original=self.price_original_eur,
            price_discounted=self.price_discounted_eur,
            duration=self.duration,
        )


class ProductsFileDTO(_FileModel):
    services: list[ServiceCategoryDTO] = Field(default_factory=list)

    def to_entities(self) -> tuple[ServiceCategory, ...]:
        return tuple(s.to_entity() for s in self.services)


class TransitLineDTO(_FileModel):
    line: str
    stop: str | None = None

    @field_validator("line", mode="before")
    @classmethod
    def _line_as_text(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


class PublicTransportDTO(_FileModel):
    bus: list[TransitLineDTO] = Field(default_factory=list)
    metro: list[TransitLineDTO] = Field(default_factory=list)

    def to_entity(self) -> PublicTransport:
        return PublicTransport(
            bus=tuple(TransitLine(line=b.line, stop=b.stop) for b in self.bus),
            metro=tuple(TransitLine(line=m.line, stop=m.stop) for m in self.metro),
        )


class LocationDTO(_FileModel):
    address: str | None = None
    directions: dict[str, str] = Field(default_factory=dict)
    public_transport: PublicTransportDTO | None = None

    @field_validator("directions", mode="before")
    @classmethod
    def _directions_by_language(cls, value: object) -> object:
        # a bare string serves every language
        if value is None:
            return {}
        if isinstance(value, str):
            return {"es": value, "en": value}
        return value

    def to_entity(self) -> Location:
        return Location(
            address=self.address,
            directions=dict(self.directions),
            public_transport=self.public_transport.to_entity() if self.public_transport else None,
        )


class ParkingOptionDTO(_FileModel):
    type: str
    location: str
    distance: str = ""
    cost: str = ""


class ParkingDTO(_FileModel):
    options: list[ParkingOptionDTO] = Field(default_factory=list)

    def to_entity(self) -> Parking:
        return Parking(
            options=tuple(
                ParkingOption(type=o.type, location=o.location, distance=o.distance, cost=o.cost)
                for o in self.options
            )
        )


class ScheduleFileDTO(_FileModel):
    business_hours: dict[str, str] | None = None
    location: LocationDTO | None = None
    parking: ParkingDTO | None = None

    def to_entity(self) -> Schedule:
        return Schedule(
            business_hours=dict(self.business_hours) if self.business_hours else None,
            location=self.location.to_entity() if self.location else None,
            parking=self.parking.to_entity() if self.parking else None,
        )


class IntentEntryDTO(_FileModel):
    patterns: list[str] = Field(default_factory=list)
    responses: dict[str, str] = Field(default_factory=dict)


class IntentsFileDTO(_FileModel):
    intents: dict[str, IntentEntryDTO] = Field(default_factory=dict)

    def to_entity(self) -> PatternTable:
        return PatternTable(
            patterns={name: tuple(p.lower() for p in entry.patterns) for name, entry in self.intents.items()},
            responses={name: dict(entry.responses) for name, entry in self.intents.items() if entry.responses},
        )


def build_knowledge_base(products: ProductsFileDTO, schedule: ScheduleFileDTO) -> KnowledgeBase:
    return KnowledgeBase(services=products.to_entities(), schedule=schedule.to_entity())
