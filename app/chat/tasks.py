"""
Celery tasks for chat app.

This module defines periodic housekeeping tasks:
- Typing indicator cleanup

Expired typing indicators are already ignored at read time, so this
only keeps the table small.

Related files:
    - services.py: TypingService
    - config/settings.py: CELERY_BEAT_SCHEDULE

Usage:
    from chat.tasks import purge_expired_typing_indicators

    purge_expired_typing_indicators.delay()
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def purge_expired_typing_indicators(self) -> int:
    """
    Delete typing indicators whose expiry has passed.

    Returns:
        Number of indicators deleted
    """
    from chat.services import TypingService

    deleted = TypingService.purge_expired()

    if deleted:
        logger.info(f"Purged {deleted} expired typing indicators")
    else:
        logger.debug("No expired typing indicators to purge")

    return deleted
