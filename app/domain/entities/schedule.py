from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TransitLine:
    line: str
    stop: str | None = None


@dataclass(frozen=True)
class PublicTransport:
    bus: tuple[TransitLine, ...] = field(default_factory=tuple)
    metro: tuple[TransitLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Location:
    address: str | None = None
    directions: dict[str, str] = field(default_factory=dict)  # language -> text
    public_transport: PublicTransport | None = None

    def directions_for(self, language: str) -> str | None:
        return self.directions.get(language) or self.directions.get("en")


@dataclass(frozen=True)
class ParkingOption:
    type: str
    location: str
    distance: str
    cost: str


@dataclass(frozen=True)
class Parking:
    options: tuple[ParkingOption, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Schedule:
    # None means the substructure was absent from the source data
    business_hours: dict[str, str] | None = None
    location: Location | None = None
    parking: Parking | None = None
