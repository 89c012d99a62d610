from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

NotificationVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotifier:
    def notify(self, notification: Notification) -> None:
        level = logging.ERROR if notification.variant == "destructive" else logging.INFO
        logger.log(
            level,
            "notification.shown",
            extra={
                "event": "notification.shown",
                "title": notification.title,
                "description": notification.description,
                "variant": notification.variant,
            },
        )
