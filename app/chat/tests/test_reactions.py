"""
Tests for reaction aggregation.

Pure functions over reaction-like objects (message_id, user_id, emoji).
"""

from types import SimpleNamespace

from chat.reactions import aggregate, aggregate_by_message


def reaction(user_id, emoji, message_id=1):
    return SimpleNamespace(message_id=message_id, user_id=user_id, emoji=emoji)


class TestAggregate:
    """Tests for grouping reactions by emoji."""

    def test_empty(self):
        assert aggregate([]) == []

    def test_groups_in_first_seen_order(self):
        """
        Groups come back in the order their emoji first appeared.

        Why it matters: Clients render reactions in a stable order.
        """
        result = aggregate(
            [
                reaction(1, "❤️"),
                reaction(2, "👍"),
                reaction(3, "❤️"),
            ]
        )

        assert result == [
            {"emoji": "❤️", "count": 2, "user_ids": [1, 3]},
            {"emoji": "👍", "count": 1, "user_ids": [2]},
        ]

    def test_user_counted_once_per_emoji(self):
        result = aggregate([reaction(1, "👍"), reaction(1, "👍")])

        assert result == [{"emoji": "👍", "count": 1, "user_ids": [1]}]

    def test_same_user_with_different_emojis(self):
        result = aggregate([reaction(1, "👍"), reaction(1, "😂")])

        assert [group["emoji"] for group in result] == ["👍", "😂"]
        assert all(group["user_ids"] == [1] for group in result)

    def test_count_matches_user_ids(self):
        result = aggregate([reaction(user_id, "😮") for user_id in range(5)])

        assert result[0]["count"] == len(result[0]["user_ids"]) == 5


class TestAggregateByMessage:
    """Tests for conversation-wide aggregation keyed by message."""

    def test_keys_by_message(self):
        result = aggregate_by_message(
            [
                reaction(1, "👍", message_id=10),
                reaction(2, "👍", message_id=20),
                reaction(3, "👍", message_id=10),
            ]
        )

        assert result[10] == [{"emoji": "👍", "count": 2, "user_ids": [1, 3]}]
        assert result[20] == [{"emoji": "👍", "count": 1, "user_ids": [2]}]

    def test_messages_without_reactions_are_absent(self):
        assert aggregate_by_message([]) == {}
