from __future__ import annotations

from dataclasses import dataclass
from typing import List

from eliteshop.constants import NOTIFY_INFO, NOTIFY_KINDS


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = NOTIFY_INFO


class NotificationQueue:
    """Toasts waiting for the next page render. Shown once, then dropped."""

    def __init__(self) -> None:
        self._pending: List[Notification] = []

    def push(self, message: str, kind: str = NOTIFY_INFO) -> Notification:
        if kind not in NOTIFY_KINDS:
            raise ValueError(f"unknown notification kind: {kind}")
        n = Notification(message, kind)
        self._pending.append(n)
        return n

    def drain(self) -> List[Notification]:
        out, self._pending = self._pending, []
        return out
