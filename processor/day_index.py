"""Day tabs and scroll positions for the chronological schedule list."""
import logging
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Union

from snarfx import Observable, reaction

from processor.models import Conference, Day, Event, Resource, Status, Time

logger = logging.getLogger(__name__)

NOT_FOUND = -1

DateLike = Union[date, datetime]


def days_between(start: DateLike, end: DateLike) -> List[DateLike]:
    """
    List the calendar days from `start` up to, but excluding, `end`.

    Steps are whole calendar days on the wall clock; daylight-saving
    transitions are not compensated.

    Args:
        start: First day (inclusive)
        end: Last day (exclusive)

    Returns:
        One entry per day, each carrying the time of day of `start`
    """
    days = []
    current = start
    while current < end:
        days.append(current)
        current = current + timedelta(days=1)
    return days


def conference_days(conference: Conference) -> List[DateLike]:
    """Tab dates for a conference, inclusive of both its start and end."""
    return days_between(conference.start_date, conference.end_date) + [conference.end_date]


def build_schedule_list(events: List[Event]) -> List[Any]:
    """
    Lay events out with day and start-time headers.

    Args:
        events: Events to show, in any order

    Returns:
        Rows sorted by start time, with a Day marker at every new calendar
        date and a Time marker at every new start time
    """
    rows: List[Any] = []
    last_date = None
    last_start = None
    for event in sorted(events, key=lambda e: e.start):
        event_date = event.start.date()
        if event_date != last_date:
            rows.append(Day(event_date))
            last_date = event_date
            last_start = None
        if event.start != last_start:
            rows.append(Time(event.start))
            last_start = event.start
        rows.append(event)
    return rows


def get_scroll_index(rows: List[Any], target: Event) -> int:
    """
    Find where to scroll so that `target` shows up under its headers.

    The anchor is the Time marker preceding the event, or the Day marker
    right above that Time marker when there is one.

    Args:
        rows: Rendered schedule rows
        target: Event to bring into view

    Returns:
        Row index, or NOT_FOUND when the event is not in the list
    """
    try:
        event_index = rows.index(target)
    except ValueError:
        return NOT_FOUND

    time_index = next(
        (i for i in range(event_index - 1, -1, -1) if isinstance(rows[i], Time)),
        None
    )
    if time_index is None:
        return event_index
    if time_index >= 1 and isinstance(rows[time_index - 1], Day):
        return time_index - 1
    return time_index


def find_scroll_position(rows: List[Any], now: Optional[datetime] = None) -> int:
    """
    Scroll index of the first event that has not finished yet.

    Returns:
        Row index, or NOT_FOUND when every event is over or there is none
    """
    first = next(
        (row for row in rows if isinstance(row, Event) and not row.has_finished(now)),
        None
    )
    if first is None:
        return NOT_FOUND
    return get_scroll_index(rows, first)


def get_date_position(rows: List[Any], target: DateLike) -> int:
    """Index of the Day marker for the calendar date of `target`, or NOT_FOUND."""
    wanted = target.date() if isinstance(target, datetime) else target
    for index, row in enumerate(rows):
        if isinstance(row, Day) and row.date == wanted:
            return index
    return NOT_FOUND


class ScheduleNavigator:
    """Scroll state for one schedule view."""

    def __init__(self):
        self.rows: List[Any] = []
        self.status = Status.NOT_INITIALIZED
        self.message: Optional[str] = None
        self.last_tick: Optional[datetime] = None
        self.show_empty = True
        self._should_scroll = True

    @property
    def is_empty(self) -> bool:
        return not any(isinstance(row, Event) for row in self.rows)

    def on_schedule(self, resource: Resource, now: Optional[datetime] = None) -> int:
        """
        Apply a new schedule value.

        Args:
            resource: Schedule resource from the view model
            now: Reference time for finding the current position

        Returns:
            Row index to scroll to, or NOT_FOUND when no scroll should happen
        """
        self.status = resource.status
        self.message = resource.message
        if resource.status is Status.SUCCESS:
            self.rows = build_schedule_list(resource.data or [])
            return self.scroll_to_current_position(now)
        if resource.status is Status.LOADING:
            self.rows = []
        return NOT_FOUND

    def scroll_to_current_position(self, now: Optional[datetime] = None) -> int:
        """Current-position scroll, performed at most once per view."""
        position = find_scroll_position(self.rows, now)
        if position == NOT_FOUND or not self._should_scroll:
            return NOT_FOUND
        self._should_scroll = False
        logger.debug(f"Scrolling schedule to row {position}")
        return position

    def on_tab_selected(self, day: DateLike) -> int:
        return get_date_position(self.rows, day)

    def on_tick(self, now: datetime) -> bool:
        """Re-evaluate on a timer tick; returns whether the empty view shows."""
        self.last_tick = now
        self.show_empty = self.is_empty
        return self.show_empty

    def watch(self, ticks: Observable):
        """Follow a tick source; dispose the returned reaction to stop."""
        return reaction(ticks.get, self.on_tick)
