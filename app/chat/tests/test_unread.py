"""
Tests for unread derivations.

These run against plain objects: the functions only look at id and
sender_id of an already ordered sequence.
"""

from types import SimpleNamespace

import pytest

from chat.unread import count_unread, messages_after_receipt


def msg(message_id, sender_id):
    return SimpleNamespace(id=message_id, sender_id=sender_id)


ALICE = 1
BOB = 2

# M1 from alice, M2 and M3 from bob
CONVERSATION = [msg(11, ALICE), msg(12, BOB), msg(13, BOB)]


class TestMessagesAfterReceipt:
    """Tests for the positional suffix after a read pointer."""

    def test_no_receipt_returns_everything(self):
        assert messages_after_receipt(CONVERSATION, None) == CONVERSATION

    def test_returns_strict_suffix_after_pointer(self):
        assert [m.id for m in messages_after_receipt(CONVERSATION, 11)] == [12, 13]

    def test_pointer_on_last_message_returns_nothing(self):
        assert messages_after_receipt(CONVERSATION, 13) == []

    def test_unknown_pointer_returns_everything(self):
        """
        A pointer to a message no longer in the sequence resets to all unread.

        Why it matters: Over-reporting unread is safer than hiding messages.
        """
        assert messages_after_receipt(CONVERSATION, 999) == CONVERSATION

    def test_empty_conversation(self):
        assert messages_after_receipt([], None) == []
        assert messages_after_receipt([], 11) == []

    def test_returns_a_new_list(self):
        result = messages_after_receipt(CONVERSATION, None)

        assert result is not CONVERSATION


class TestCountUnread:
    """Tests for unread counting with own messages excluded."""

    def test_without_receipt_counts_messages_from_others(self):
        """
        Bob never read anything: only alice's M1 counts for him.

        Why it matters: A user's own messages are never unread for them.
        """
        assert count_unread(CONVERSATION, None, BOB) == 1
        assert count_unread(CONVERSATION, None, ALICE) == 2

    def test_after_reading_first_message(self):
        assert count_unread(CONVERSATION, 11, BOB) == 0
        assert count_unread(CONVERSATION, 11, ALICE) == 2

    def test_new_message_after_pointer_counts(self):
        messages = CONVERSATION + [msg(14, ALICE)]

        assert count_unread(messages, 11, BOB) == 1

    @pytest.mark.parametrize("pointer", [None, 11, 12, 13, 999])
    def test_count_never_exceeds_suffix_length(self, pointer):
        assert count_unread(CONVERSATION, pointer, BOB) <= len(
            messages_after_receipt(CONVERSATION, pointer)
        )

    def test_unknown_pointer_counts_all_from_others(self):
        assert count_unread(CONVERSATION, 999, ALICE) == 2
