from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.classify_intent import ClassifyIntentUseCase
from app.application.use_cases.generate_reply import GenerateReplyUseCase
from app.application.use_cases.process_message import ProcessMessageUseCase
from app.domain.entities.knowledge_base import KnowledgeBase, NlpContext
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.knowledge.context_loader import KnowledgeContextLoader
from app.infrastructure.knowledge.default_patterns import default_pattern_table
from app.infrastructure.knowledge.json_source import JsonKnowledgeSource
from app.infrastructure.store.memory_store import MemoryConversationStore

MADRID = ZoneInfo("Europe/Madrid")
# A Monday
TODAY = date(2026, 3, 2)


@pytest.fixture(scope="session")
def context() -> NlpContext:
    """Bundled salon data, loaded once for the whole run."""
    return KnowledgeContextLoader(JsonKnowledgeSource()).get()


@pytest.fixture
def empty_context() -> NlpContext:
    return NlpContext(kb=KnowledgeBase(), patterns=default_pattern_table())


@pytest.fixture
def classifier(context: NlpContext) -> ClassifyIntentUseCase:
    return ClassifyIntentUseCase(context)


@pytest.fixture
def replies(context: NlpContext) -> GenerateReplyUseCase:
    return GenerateReplyUseCase(context, business_name="Hera's Nails and Lashes")


@pytest.fixture
def store() -> MemoryConversationStore:
    return MemoryConversationStore()


@pytest.fixture
def calendar() -> MockCalendar:
    return MockCalendar(timezone=MADRID)


@pytest.fixture
def booking(calendar: MockCalendar, store: MemoryConversationStore) -> BookingUseCase:
    return BookingUseCase(calendar=calendar, store=store, timezone=MADRID, today=lambda: TODAY)


@pytest.fixture
def client(context, store, calendar, booking):
    from app.main import app
    from app.wiring import dependencies

    process_message = ProcessMessageUseCase(
        classify_intent=ClassifyIntentUseCase(context),
        generate_reply=GenerateReplyUseCase(context),
        store=store,
    )
    app.dependency_overrides[dependencies.get_nlp_context] = lambda: context
    app.dependency_overrides[dependencies.get_process_message_use_case] = lambda: process_message
    app.dependency_overrides[dependencies.get_conversation_store] = lambda: store
    app.dependency_overrides[dependencies.get_calendar] = lambda: calendar
    app.dependency_overrides[dependencies.get_booking_use_case] = lambda: booking
    app.dependency_overrides[dependencies.get_timezone] = lambda: MADRID
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
