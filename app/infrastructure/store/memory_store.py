from __future__ import annotations

import threading

from app.application.ports.conversation_store import ConversationStorePort
from app.domain.entities.conversation_state import ConversationState


class MemoryConversationStore(ConversationStorePort):
    """Per-session state kept in process memory; lost on restart."""

    def __init__(self) -> None:
        self._states: dict[str, ConversationState] = {}
        self._lock = threading.Lock()

    def get_state(self, session_id: str) -> ConversationState:
        with self._lock:
            return self._states.get(session_id, ConversationState())

    def set_state(self, session_id: str, state: ConversationState) -> None:
        with self._lock:
            self._states[session_id] = state

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._states.pop(session_id, None)

    def session_count(self) -> int:
        with self._lock:
            return len(self._states)
