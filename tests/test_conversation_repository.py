"""Unit tests for the in-memory conversation context store."""

import threading

from app.dtos import ConversationTurn
from app.repositories import InMemoryConversationRepository


def _turn(i, role="user"):
    return ConversationTurn(role=role, content=f"message {i}")


class TestInMemoryConversationRepository:
    def test_unknown_dataset_is_empty(self, repo):
        assert repo.get("never-seen") == []
        assert repo.get_history_for_llm("never-seen") == []

    def test_bound_keeps_most_recent_in_order(self, repo):
        for i in range(12):
            repo.append("ds1", _turn(i))

        contents = [t.content for t in repo.get("ds1")]
        assert contents == [f"message {i}" for i in range(2, 12)]

    def test_extend_adds_turns_as_a_unit(self, repo):
        repo.extend("ds1", [_turn(1, "user"), _turn(2, "assistant")])

        assert [t.role for t in repo.get("ds1")] == ["user", "assistant"]
        assert repo.get_history_for_llm("ds1") == [
            {"role": "user", "content": "message 1"},
            {"role": "assistant", "content": "message 2"},
        ]

    def test_get_returns_a_copy(self, repo):
        repo.append("ds1", _turn(1))
        repo.get("ds1").clear()
        assert len(repo.get("ds1")) == 1

    def test_datasets_are_isolated(self, repo):
        repo.append("a", _turn(1))
        repo.append("b", _turn(2))
        repo.clear("a")

        assert repo.get("a") == []
        assert [t.content for t in repo.get("b")] == ["message 2"]

    def test_custom_bound(self):
        repo = InMemoryConversationRepository(max_turns=3)
        repo.extend("ds", [_turn(i) for i in range(5)])
        assert [t.content for t in repo.get("ds")] == ["message 2", "message 3", "message 4"]

    def test_concurrent_writers_never_exceed_bound(self, repo):
        def writer(offset):
            for i in range(50):
                repo.extend("shared", [_turn(offset + i, "user"), _turn(offset + i, "assistant")])

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        turns = repo.get("shared")
        assert len(turns) == 10
        # Pairs were written atomically, so roles still alternate
        assert [t.role for t in turns] == ["user", "assistant"] * 5
