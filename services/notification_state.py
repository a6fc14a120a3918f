"""
services/notification_state.py
------------------------------
The set of alerts currently shown to the user.

Each recomputation replaces the whole set. Dismissals are not
remembered, so a dismissed alert comes back on the next recomputation
for as long as its condition holds.
"""

from typing import Iterable


class NotificationState:
    """Ordered, replace-on-recompute list of active alert messages."""

    def __init__(self, messages: Iterable[str] = ()):
        self._messages: list[str] = list(messages)

    def replace(self, messages: Iterable[str]) -> None:
        self._messages = list(messages)

    def dismiss(self, message: str) -> bool:
        """
        Remove an exact match from the displayed set.

        Returns:
            True if the message was showing.
        """
        before = len(self._messages)
        self._messages = [m for m in self._messages if m != message]
        return len(self._messages) != before

    @property
    def active(self) -> list[str]:
        return list(self._messages)

    def __contains__(self, message: str) -> bool:
        return message in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self):
        return iter(list(self._messages))
