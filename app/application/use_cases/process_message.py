from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from app.application.ports.conversation_store import ConversationStorePort
from app.application.use_cases.classify_intent import ClassifyIntentUseCase
from app.application.use_cases.generate_reply import GenerateReplyUseCase
from app.domain.entities.intent import Intent


@dataclass(frozen=True)
class ProcessedMessage:
    intent: Intent
    response: str

    @property
    def language(self) -> str:
        return self.intent.language


class ProcessMessageUseCase:
    """classify + respond, optionally remembering the last intent for a session."""

    def __init__(
        self,
        classify_intent: ClassifyIntentUseCase,
        generate_reply: GenerateReplyUseCase,
        store: ConversationStorePort | None = None,
    ) -> None:
        self._classify_intent = classify_intent
        self._generate_reply = generate_reply
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, text: str | None, language: str | None = "en", session_id: str | None = None) -> ProcessedMessage:
        intent = self._classify_intent.execute(text, language)
        response = self._generate_reply.execute(intent, intent.language)

        if session_id and self._store is not None:
            state = self._store.get_state(session_id)
            self._store.set_state(
                session_id,
                replace(state, last_intent=intent.type.value, language=intent.language),
            )

        self._logger.info(
            "Message processed",
            extra={
                "intent": intent.type.value,
                "confidence": intent.confidence,
                "language": intent.language,
                "service": intent.service,
            },
        )
        return ProcessedMessage(intent=intent, response=response)
