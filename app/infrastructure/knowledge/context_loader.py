from __future__ import annotations

import logging
import threading

from app.application.ports.knowledge_base import KnowledgeSourcePort
from app.domain.entities.knowledge_base import NlpContext


class KnowledgeContextLoader:
    """
    Builds the shared NlpContext exactly once per loader.

    Concurrent first callers block on the lock; only the first one reads the source,
    the others get the same object. load_count counts real loads.
    """

    def __init__(self, source: KnowledgeSourcePort) -> None:
        self._source = source
        self._context: NlpContext | None = None
        self._lock = threading.Lock()
        self._load_count = 0
        self._logger = logging.getLogger(__name__)

    @property
    def load_count(self) -> int:
        return self._load_count

    @property
    def loaded(self) -> bool:
        return self._context is not None

    def get(self) -> NlpContext:
        context = self._context
        if context is not None:
            return context
        with self._lock:
            if self._context is None:
                kb = self._source.load_knowledge_base()
                patterns = self._source.load_pattern_table()
                self._context = NlpContext(kb=kb, patterns=patterns)
                self._load_count += 1
                self._logger.info(
                    "NLP context ready",
                    extra={"reason": f"services={len(kb.services)} intents={len(patterns.patterns)}"},
                )
            return self._context
