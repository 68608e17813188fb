from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    """A user-facing notification.

    This model is UI-framework agnostic; the presentation layer polls
    MessageCenter.current to decide what to draw.
    """

    text: str
    severity: Severity = Severity.INFO
    duration: float = 2.5


class MessageCenter:
    """Shows one message at a time for a fixed duration.

    A new message always replaces the visible one and restarts the hide timer;
    messages never stack.
    """

    def __init__(self, scheduler: Scheduler, duration: float = 2.5) -> None:
        self.scheduler = scheduler
        self.duration = duration
        self._current: Optional[Message] = None
        self._timer: Optional[ScheduledCall] = None
        self._history: List[Message] = []

    @property
    def current(self) -> Optional[Message]:
        return self._current

    @property
    def history(self) -> List[Message]:
        return list(self._history)

    def show(self, text: str, severity: Severity = Severity.INFO) -> Message:
        if self._timer is not None:
            self._timer.cancel()
        msg = Message(text=text, severity=severity, duration=self.duration)
        self._current = msg
        self._history.append(msg)
        self._timer = self.scheduler.call_later(self.duration, self._hide)
        logger.log(
            logging.WARNING if severity in (Severity.WARNING, Severity.ERROR) else logging.INFO,
            "Message [%s]: %s",
            severity.value,
            text,
        )
        return msg

    def dismiss(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._hide()

    def _hide(self) -> None:
        self._current = None
        self._timer = None
