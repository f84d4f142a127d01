import logging
from dataclasses import dataclass
from app.models.enums import NotificationLevel

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: NotificationLevel
    message: str


class Notifier:
    """Transient success/failure messages shown once on the next page render."""

    def __init__(self):
        self._pending: list[Notification] = []

    def success(self, message: str) -> None:
        logger.info(message)
        self._pending.append(Notification(NotificationLevel.SUCCESS, message))

    def error(self, message: str) -> None:
        logger.warning(message)
        self._pending.append(Notification(NotificationLevel.ERROR, message))

    def peek(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        pending, self._pending = self._pending, []
        return pending
