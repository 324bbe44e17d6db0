import logging
from collections import deque
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_PENDING_NOTIFICATIONS = 50


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


class Notifier:
    def __init__(self, limit: int = MAX_PENDING_NOTIFICATIONS) -> None:
        self._pending: deque[Notification] = deque(maxlen=limit)

    def notify(self, title: str, description: str) -> Notification:
        notification = Notification(title=title, description=description)
        logger.info("%s: %s", title, description)
        self._pending.append(notification)
        return notification

    def error(self, description: str) -> Notification:
        notification = Notification(title="Error", description=description, variant="destructive")
        logger.error("Error: %s", description)
        self._pending.append(notification)
        return notification

    def drain(self) -> list[Notification]:
        drained = list(self._pending)
        self._pending.clear()
        return drained
