from abc import ABC, abstractmethod

from app.domain.entities.knowledge_base import KnowledgeBase, PatternTable


class KnowledgeSourcePort(ABC):
    @abstractmethod
    def load_knowledge_base(self) -> KnowledgeBase:
        """
        Load the service catalog and schedule facts.
        Must not raise for missing or malformed data: degrade to an empty structure instead.
        """
        raise NotImplementedError

    @abstractmethod
    def load_pattern_table(self) -> PatternTable:
        """
        Load intent trigger phrases and canned greeting/goodbye responses.
        Falls back to the built-in default table when the source is unusable.
        """
        raise NotImplementedError
