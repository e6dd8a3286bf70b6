import threading
from collections import deque
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

MAX_PENDING_NOTIFICATIONS = 50


@dataclass(frozen=True)
class Notification:
    level: str
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level, "message": self.message}


class NotificationCenter:
    """Transient toast channel. Nothing waits on a notification being shown."""

    def __init__(self, maxlen: int = MAX_PENDING_NOTIFICATIONS):
        self._pending: deque[Notification] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def _push(self, level: str, message: str):
        with self._lock:
            self._pending.append(Notification(level=level, message=message))

    def error(self, message: str):
        logger.error("User notified of error", message=message)
        self._push("error", message)

    def info(self, message: str):
        logger.info("User notified", message=message)
        self._push("info", message)

    def drain(self) -> list[Notification]:
        with self._lock:
            notifications = list(self._pending)
            self._pending.clear()
        return notifications
