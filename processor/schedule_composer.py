"""Category and bookmark filtering for the schedule view."""
import logging
from typing import List

from processor.models import Event, Type

logger = logging.getLogger(__name__)


def compute_schedule(events: List[Event], types: List[Type]) -> List[Event]:
    """
    Filter events by the selected categories and the bookmark toggle.

    With nothing selected every event is shown. The bookmark pseudo-type
    only narrows the result to bookmarked events and is never compared
    against an event's own type.

    Args:
        events: Events in display order
        types: Categories with their current selection flags

    Returns:
        The shown events, in input order
    """
    if not types:
        return events

    bookmark_type = next((t for t in types if t.is_bookmark), None)
    require_bookmark = bookmark_type.is_selected if bookmark_type else False
    active_filters = [t for t in types if not t.is_bookmark and t.is_selected]

    if not require_bookmark and not active_filters:
        return events

    if require_bookmark and not active_filters:
        return [event for event in events if event.is_bookmarked]

    selected_ids = {t.id for t in active_filters}
    shown = [
        event for event in events
        if _is_shown(event, require_bookmark, selected_ids)
    ]
    logger.debug(
        f"Schedule filter kept {len(shown)} of {len(events)} events "
        f"(bookmarked only: {require_bookmark}, categories: {sorted(selected_ids)})"
    )
    return shown


def _is_shown(event: Event, require_bookmark: bool, selected_ids: set) -> bool:
    if require_bookmark and not event.is_bookmarked:
        return False
    return event.type.id in selected_ids
