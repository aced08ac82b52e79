"""
Reaction aggregation.

aggregate() groups individual MessageReaction rows by emoji for display.
It is pure: callers pass reactions already ordered by (created_at, id),
and the groups come back in first-seen emoji order.

Usage:
    from chat.reactions import aggregate, aggregate_by_message

    groups = aggregate(message.reactions.all())
    # [{"emoji": "👍", "count": 2, "user_ids": [3, 7]}, ...]
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def aggregate(reactions: Iterable[Any]) -> list[dict]:
    """
    Group reactions by emoji.

    Each group has emoji, count and user_ids (in reaction order). A user
    is never counted twice for the same emoji.
    """
    groups: dict[str, dict] = {}
    for reaction in reactions:
        group = groups.setdefault(
            reaction.emoji,
            {"emoji": reaction.emoji, "count": 0, "user_ids": []},
        )
        if reaction.user_id in group["user_ids"]:
            continue
        group["user_ids"].append(reaction.user_id)
        group["count"] += 1
    return list(groups.values())


def aggregate_by_message(reactions: Iterable[Any]) -> dict[int, list[dict]]:
    """
    Aggregate a conversation-wide reaction list per message id.

    Messages without reactions are absent from the result.
    """
    per_message: dict[int, list] = {}
    for reaction in reactions:
        per_message.setdefault(reaction.message_id, []).append(reaction)
    return {message_id: aggregate(items) for message_id, items in per_message.items()}
