"""
Unread derivations over an ordered message sequence.

These are pure functions: they take the conversation's messages already
ordered by (created_at, id) and the id of the message a read receipt
points at, and never touch the database.

Receipt semantics:
    - No receipt (None): every message is unread
    - Receipt found in the sequence: messages strictly after it are unread
    - Receipt id not in the sequence: the whole sequence is unread
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def messages_after_receipt(messages: Sequence[T], last_read_message_id: int | None) -> list[T]:
    """
    Return the messages positioned after the read pointer.

    Args:
        messages: Conversation messages ordered by (created_at, id)
        last_read_message_id: Id the receipt points at, or None

    Returns:
        Suffix of messages after the pointer (all of them if the pointer
        is None or not found)
    """
    if last_read_message_id is None:
        return list(messages)

    for index, message in enumerate(messages):
        if message.id == last_read_message_id:
            return list(messages[index + 1 :])

    return list(messages)


def count_unread(
    messages: Sequence[T],
    last_read_message_id: int | None,
    reader_id: int,
) -> int:
    """
    Count unread messages for reader_id, ignoring the reader's own messages.
    """
    return sum(
        1
        for message in messages_after_receipt(messages, last_read_message_id)
        if message.sender_id != reader_id
    )
