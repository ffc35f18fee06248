"""
Unit tests for per-game card memory.
"""

import pytest
from bot.memory import CardMemory
from conftest import cards, trick


class TestCardMemory:
    """Test the seen-cards ledger."""

    def test_observe_records_cards(self):
        memory = CardMemory()
        added = memory.observe("g1", trick(("p2", "r3"), ("p3", "r5")))
        assert added == 2
        assert memory.seen("g1") == frozenset(cards("r3 r5"))
        assert "g1" in memory

    def test_deduplicates(self):
        memory = CardMemory()
        memory.observe("g1", trick(("p2", "r3")))
        added = memory.observe("g1", trick(("p2", "r3"), ("p3", "r5")))
        assert added == 1
        assert memory.history("g1") == cards("r3 r5")

    def test_previous_trick(self):
        memory = CardMemory()
        memory.observe("g1", trick(("p1", "u2")),
                       previous_trick=trick(("p2", "g7"), ("p3", "g1")))
        assert memory.history("g1") == cards("g7 g1 u2")

    def test_games_are_separate(self):
        memory = CardMemory()
        memory.observe("g1", trick(("p2", "r3")))
        memory.observe("g2", trick(("p2", "u4")))
        assert memory.seen("g1") == frozenset(cards("r3"))
        assert memory.seen("g2") == frozenset(cards("u4"))
        assert len(memory) == 2

    def test_clear(self):
        memory = CardMemory()
        memory.observe("g1", trick(("p2", "r3")))
        memory.clear("g1")
        assert "g1" not in memory
        assert memory.seen("g1") == frozenset()
        assert len(memory) == 0

    def test_clear_unknown_game(self):
        memory = CardMemory()
        memory.clear("missing")
        assert len(memory) == 0


if __name__ == "__main__":
    pytest.main([__file__])
