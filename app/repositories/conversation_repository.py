"""
Repository for per-dataset conversation context
"""
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from threading import Lock
from typing import Dict, Iterable, List, Optional

from app.core.config import settings
from app.dtos import ConversationTurn

logger = logging.getLogger(__name__)


class ConversationRepository(ABC):
    """
    Bounded message history keyed by dataset id

    Contract shared by every backing store:
    - get() on an unknown id returns an empty list, never raises
    - append/extend add turns then drop the oldest past max_turns,
      atomically per dataset id
    - clear() is the only way turns are removed besides truncation
    """

    def __init__(self, max_turns: Optional[int] = None):
        self.max_turns = max_turns or settings.CONTEXT_MAX_TURNS

    @abstractmethod
    def get(self, dataset_id: str) -> List[ConversationTurn]:
        """Return a copy of the turns for a dataset (oldest first)"""

    @abstractmethod
    def extend(self, dataset_id: str, turns: Iterable[ConversationTurn]) -> None:
        """Append several turns as one unit, then enforce the bound"""

    @abstractmethod
    def clear(self, dataset_id: str) -> None:
        """Remove every turn for a dataset"""

    def append(self, dataset_id: str, turn: ConversationTurn) -> None:
        self.extend(dataset_id, [turn])

    def get_history_for_llm(self, dataset_id: str) -> List[Dict[str, str]]:
        """
        Get conversation history formatted for LLM context

        Returns:
            [{"role": "user", "content": "..."}, {"role": "assistant", ...}]
        """
        return [turn.as_llm_message() for turn in self.get(dataset_id)]


class InMemoryConversationRepository(ConversationRepository):
    """
    Process-local store with one lock per dataset id

    The registry lock is only held while looking up a dataset lock, so
    writers for different datasets never wait on each other.
    """

    def __init__(self, max_turns: Optional[int] = None):
        super().__init__(max_turns)
        self._turns: Dict[str, List[ConversationTurn]] = defaultdict(list)
        self._locks: Dict[str, Lock] = {}
        self._registry_lock = Lock()

    def _lock_for(self, dataset_id: str) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(dataset_id)
            if lock is None:
                lock = self._locks[dataset_id] = Lock()
            return lock

    def get(self, dataset_id: str) -> List[ConversationTurn]:
        with self._lock_for(dataset_id):
            return list(self._turns.get(dataset_id, ()))

    def extend(self, dataset_id: str, turns: Iterable[ConversationTurn]) -> None:
        new_turns = list(turns)
        if not new_turns:
            return

        with self._lock_for(dataset_id):
            context = self._turns[dataset_id]
            context.extend(new_turns)

            overflow = len(context) - self.max_turns
            if overflow > 0:
                del context[:overflow]

        logger.debug(f"Appended {len(new_turns)} turn(s) to dataset {dataset_id}")

    def clear(self, dataset_id: str) -> None:
        with self._lock_for(dataset_id):
            self._turns.pop(dataset_id, None)

        logger.info(f"Cleared conversation context for dataset {dataset_id}")


# Global instance (singleton pattern)
conversation_repo: ConversationRepository = InMemoryConversationRepository()


def get_conversation_repo() -> ConversationRepository:
    """Dependency for getting the conversation store"""
    return conversation_repo
