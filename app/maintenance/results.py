"""Outcome of a maintenance operation"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Notification:
    """An alert that still has to be delivered"""
    subject: str
    message: str
    is_error: bool = False


@dataclass
class TaskResult:
    """Count of affected records plus the alert the run produced, if any"""
    count: int = 0
    notification: Optional[Notification] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
