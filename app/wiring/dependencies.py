from functools import lru_cache
import logging
import threading
from zoneinfo import ZoneInfo

from twilio.rest import Client

from app.core.config import settings
from app.application.ports.calendar import CalendarPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.classify_intent import ClassifyIntentUseCase
from app.application.use_cases.generate_reply import GenerateReplyUseCase
from app.application.use_cases.process_message import ProcessMessageUseCase
from app.domain.entities.knowledge_base import KnowledgeBase, NlpContext
from app.infrastructure.calendar.cal_com_client import CalComCalendar
from app.infrastructure.calendar.mock_calendar import MockCalendar
from app.infrastructure.knowledge.context_loader import KnowledgeContextLoader
from app.infrastructure.knowledge.json_source import JsonKnowledgeSource
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.infrastructure.voice.twiml import TwimlBuilder


_context_loader: KnowledgeContextLoader | None = None
_context_loader_lock = threading.Lock()


def get_context_loader() -> KnowledgeContextLoader:
    global _context_loader
    if _context_loader is None:
        with _context_loader_lock:
            if _context_loader is None:
                _context_loader = KnowledgeContextLoader(JsonKnowledgeSource(settings.KNOWLEDGE_DATA_DIR))
    return _context_loader


def get_nlp_context() -> NlpContext:
    return get_context_loader().get()


def load_knowledge_base() -> KnowledgeBase:
    """Idempotent: the first call reads the data files, later calls return the cached snapshot."""
    return get_nlp_context().kb


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    return MemoryConversationStore()


@lru_cache
def get_calendar() -> CalendarPort:
    logger = logging.getLogger(__name__)
    if not settings.CAL_COM_API_KEY or settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockCalendar (no Cal.com key or ENV=dev/local)")
        return MockCalendar(
            timezone=get_timezone(),
            opening_hour=settings.OPENING_HOUR,
            closing_hour=settings.CLOSING_HOUR,
        )
    logger.info("Using Cal.com calendar")
    return CalComCalendar()


def get_classify_intent_use_case() -> ClassifyIntentUseCase:
    return ClassifyIntentUseCase(context=get_nlp_context())


def get_generate_reply_use_case() -> GenerateReplyUseCase:
    return GenerateReplyUseCase(context=get_nlp_context(), business_name=settings.BUSINESS_NAME)


def get_process_message_use_case() -> ProcessMessageUseCase:
    return ProcessMessageUseCase(
        classify_intent=get_classify_intent_use_case(),
        generate_reply=get_generate_reply_use_case(),
        store=get_conversation_store(),
    )


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        calendar=get_calendar(),
        store=get_conversation_store(),
        timezone=get_timezone(),
    )


@lru_cache
def get_twilio_client() -> Client | None:
    if not settings.TWILIO_ACCOUNT_SID or not settings.TWILIO_AUTH_TOKEN:
        return None
    return Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)


def get_twiml_builder() -> TwimlBuilder:
    return TwimlBuilder(voice=settings.TWILIO_VOICE)
