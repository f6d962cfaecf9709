from dataclasses import dataclass

from app.domain.entities.booking_state import BookingState


@dataclass(frozen=True)
class ConversationState:
    last_intent: str | None = None
    language: str | None = None  # "en" | "es" | None
    booking_state: BookingState = BookingState()
