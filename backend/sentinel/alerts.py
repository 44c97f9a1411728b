# sentinel/alerts.py
# ------------------------------------------------------------
# In-memory alert log: append-only, oldest first.
# Display consumers read the newest N in reverse order.
# ------------------------------------------------------------

from typing import List

from .models import IntrusionLog


class AlertLog:
    def __init__(self) -> None:
        self._items: List[IntrusionLog] = []

    def append(self, log: IntrusionLog) -> None:
        self._items.append(log)

    def list_recent(self, n: int = 50) -> List[IntrusionLog]:
        """
        Last `n` logs, newest first.
        """
        if n <= 0:
            return []
        return list(reversed(self._items[-n:]))

    def all(self) -> List[IntrusionLog]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
