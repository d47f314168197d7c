"""Free-text search over speakers, locations and events."""
from typing import Any, List

from processor.models import Event, Location, Speaker

SPEAKERS_LABEL = "Speakers"
EVENTS_LABEL = "Events"


def compute_search(
    query: str,
    events: List[Event],
    locations: List[Location],
    speakers: List[Speaker]
) -> List[Any]:
    """
    Build the grouped search result list.

    Groups are always emitted in the same order: the "Speakers" label with
    matching speakers, then each matching location followed by every event
    held there (earliest first), then the "Events" label with matching
    events. Empty groups are left out.

    Args:
        query: Text typed by the user
        events: All events of the conference
        locations: All locations of the conference
        speakers: All speakers of the conference

    Returns:
        Heterogeneous list of labels, speakers, locations and events
    """
    if query is None or not query.strip():
        return []

    needle = query.lower()
    results: List[Any] = []

    matched_speakers = [
        speaker for speaker in speakers
        if _contains(speaker.name, needle) or _contains(speaker.description, needle)
    ]
    if matched_speakers:
        results.append(SPEAKERS_LABEL)
        results.extend(matched_speakers)

    for location in locations:
        if not _contains(location.name, needle):
            continue
        results.append(location)
        # Every event at the location is listed, not only those matching the query.
        held_here = [e for e in events if e.location.name == location.name]
        results.extend(sorted(held_here, key=lambda e: e.start))

    matched_events = [
        event for event in events
        if _contains(event.title, needle) or _contains(event.description, needle)
    ]
    if matched_events:
        results.append(EVENTS_LABEL)
        results.extend(matched_events)

    return results


def _contains(text: str, needle: str) -> bool:
    return bool(text) and needle in text.lower()
