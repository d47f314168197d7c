"""Data models for the conference schedule."""
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

BOOKMARK_TYPE_ID = -1
BOOKMARK_TYPE_NAME = "Bookmarked"


@dataclass(frozen=True)
class Type:
    """Event category, or the synthetic "Bookmarked" pseudo-category."""
    id: int
    name: str
    is_bookmark: bool = False
    is_selected: bool = False

    @classmethod
    def bookmark(cls, is_selected: bool = False) -> "Type":
        return cls(
            id=BOOKMARK_TYPE_ID,
            name=BOOKMARK_TYPE_NAME,
            is_bookmark=True,
            is_selected=is_selected
        )


@dataclass(frozen=True)
class Location:
    id: int
    name: str


@dataclass(frozen=True)
class Speaker:
    id: int
    name: str
    description: str = ""


@dataclass(frozen=True)
class Article:
    """News item published by the conference."""
    id: int
    name: str
    text: str = ""


@dataclass(frozen=True)
class Conference:
    """Conference metadata; start and end dates bound the day tabs."""
    id: int
    name: str
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class Event:
    """Scheduled talk, workshop or party."""
    id: int
    title: str
    description: str
    start: datetime
    end: Optional[datetime]
    type: Type
    location: Location
    is_bookmarked: bool = False

    def has_finished(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the event is over.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            True once the end time (or the start time, when the event has
            no end) lies before `now`
        """
        if now is None:
            now = datetime.now(timezone.utc)
        finish = self.end if self.end is not None else self.start
        return finish < now


@dataclass(frozen=True)
class Day:
    """Day header in a rendered schedule list."""
    date: date


@dataclass(frozen=True)
class Time:
    """Start-time header in a rendered schedule list."""
    start: datetime


class Status(Enum):
    NOT_INITIALIZED = "not_initialized"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Resource:
    """Derived value annotated with its load status."""
    status: Status
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def init(cls, data: Any = None) -> "Resource":
        return cls(Status.NOT_INITIALIZED, data)

    @classmethod
    def loading(cls, data: Any = None) -> "Resource":
        return cls(Status.LOADING, data)

    @classmethod
    def success(cls, data: Any) -> "Resource":
        return cls(Status.SUCCESS, data)

    @classmethod
    def error(cls, message: str, data: Any = None) -> "Resource":
        return cls(Status.ERROR, data, message)

    @property
    def is_success(self) -> bool:
        return self.status is Status.SUCCESS
