from __future__ import annotations

from app.application.utils.service_vocabulary import (
    ENTITY_SERVICE_TERMS,
    PRICE_KEYWORDS,
    TIME_KEYWORDS,
)
from app.domain.entities.intent import Entity


def extract_entities(text: str) -> tuple[Entity, ...]:
    """
    Pull service, time and price references out of normalized text.

    Every canonical service is checked, so several service entities can come back;
    within one service the first matching surface form wins. Time and price keywords
    each produce an entity per match. Overlaps are not deduplicated.
    """
    entities: list[Entity] = []

    for canonical, forms in ENTITY_SERVICE_TERMS.items():
        for form in forms:
            if form in text:
                entities.append(Entity(type="service", value=canonical))
                break

    for keyword in TIME_KEYWORDS:
        if keyword in text:
            entities.append(Entity(type="time", value=keyword))

    for keyword in PRICE_KEYWORDS:
        if keyword in text:
            entities.append(Entity(type="price", value=keyword))

    return tuple(entities)


def first_service(text: str) -> str | None:
    for entity in extract_entities(text):
        if entity.type == "service":
            return entity.value
    return None
