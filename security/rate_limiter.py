"""
security/rate_limiter.py
-------------------------
Rate limiting middleware to prevent API abuse.
Limits the number of messages a user can send within a sliding window.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window counter per user.

    Args:
        max_messages: Messages allowed inside one window.
        window_seconds: Window length.
        clock: Returns the current time in seconds.
    """

    def __init__(self, max_messages: int = RATE_LIMIT_MESSAGES,
                 window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
                 clock: Callable[[], float] = time.time):
        self.max_messages = max_messages
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: dict[int, list[float]] = defaultdict(list)

    def _cleanup(self, user_id: int, now: float) -> None:
        """Remove expired timestamps for a user."""
        cutoff = now - self.window_seconds
        self._timestamps[user_id] = [t for t in self._timestamps[user_id] if t > cutoff]

    def allow(self, user_id: int) -> bool:
        """Record a message and report whether it is within the limit."""
        now = self._clock()
        self._cleanup(user_id, now)
        if len(self._timestamps[user_id]) >= self.max_messages:
            return False
        self._timestamps[user_id].append(now)
        return True


_limiter = RateLimiter()


def rate_limited(func: Callable):
    """
    Decorator that enforces rate limiting per user.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max messages per window (default: 30).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not _limiter.allow(user.id):
            logger.warning(f"Rate limit hit for user {user.id}")
            await update.message.reply_text(
                "⚠️ You're sending messages too quickly. Please wait a moment and try again."
            )
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
