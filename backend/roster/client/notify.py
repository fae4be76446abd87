"""Transient user notifications (the dashboard's toasts)."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Protocol

from roster.core.constants import NotificationVariant
from roster.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


class Notifier(Protocol):
    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None: ...


class LogNotifier:
    """Logs every notification and remembers the most recent ones."""

    def __init__(self, keep: int = 20) -> None:
        self.recent: deque[Notification] = deque(maxlen=keep)

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        note = Notification(title, description, variant)
        self.recent.append(note)
        if note.is_error:
            logger.warning(title, description=description)
        else:
            logger.info(title, description=description)

    @property
    def last(self) -> Notification | None:
        return self.recent[-1] if self.recent else None
