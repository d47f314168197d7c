"""Derived conference state: schedule, search results and day tabs."""
import logging
from dataclasses import replace
from typing import Any, Callable, FrozenSet, Iterable, List, Optional

from snarfx import Computed, Observable, computed

from processor.day_index import conference_days
from processor.models import (
    BOOKMARK_TYPE_ID,
    Conference,
    Event,
    Resource,
    Status,
    Type,
)
from processor.schedule_composer import compute_schedule
from processor.search_composer import compute_search
from storage.database import ConferenceDatabase

logger = logging.getLogger(__name__)


def apply_selection(types: List[Type], selected: FrozenSet[int]) -> List[Type]:
    """
    Copy the stored types with their selection flags filled in.

    A non-empty type list always gets a "Bookmarked" pseudo-type in front
    when the store does not provide one.
    """
    if types and not any(t.is_bookmark for t in types):
        types = [Type.bookmark()] + list(types)
    return [replace(t, is_selected=t.id in selected) for t in types]


def apply_bookmarks(events: List[Event], bookmarks: FrozenSet[int]) -> List[Event]:
    """Copy the stored events with their bookmark flags filled in."""
    return [replace(e, is_bookmarked=e.id in bookmarks) for e in events]


class ConferenceViewModel:
    """
    Reactive state for one conference screen.

    The inputs (`selected_types`, `bookmarks`, `query`) are snarfx
    Observables. Every derived attribute is a Computed holding a Resource,
    except `days` which holds a plain list. Derived values track what they
    read, so they recompute whenever the conference, a store collection,
    the filter selection, the bookmarks or the query changes, always from
    the latest value of every input.
    """

    def __init__(self, database: ConferenceDatabase):
        """
        Args:
            database: Store that resolves the conference and its records
        """
        self.database = database

        self.selected_types: Observable = Observable(frozenset())
        self.bookmarks: Observable = Observable(frozenset())
        self.query: Observable = Observable("")

        self.conference: Computed = computed(self._conference)
        self.types: Computed = computed(
            lambda: self._collection(database.get_types, apply_selection, self.selected_types)
        )
        self.locations: Computed = computed(lambda: self._collection(database.get_locations))
        self.events: Computed = computed(
            lambda: self._collection(database.get_events, apply_bookmarks, self.bookmarks)
        )
        self.speakers: Computed = computed(lambda: self._collection(database.get_speakers))
        self.articles: Computed = computed(lambda: self._collection(database.get_articles))

        self.schedule: Computed = computed(self._schedule)
        self.search: Computed = computed(self._search)
        self.days: Computed = computed(self._days)

    def on_query_text_change(self, text: Optional[str]) -> None:
        self.query.set(text or "")

    def set_type_selected(self, type_id: int, selected: bool) -> None:
        """
        Select or deselect one category filter.

        Args:
            type_id: Category id, or BOOKMARK_TYPE_ID for the bookmark toggle
            selected: New selection state
        """
        current = self.selected_types.get()
        updated = current | {type_id} if selected else current - {type_id}
        self.selected_types.set(frozenset(updated))

    def toggle_type(self, type_id: int) -> None:
        self.set_type_selected(type_id, type_id not in self.selected_types.get())

    def set_bookmarked_only(self, enabled: bool) -> None:
        self.set_type_selected(BOOKMARK_TYPE_ID, enabled)

    def clear_filters(self) -> None:
        self.selected_types.set(frozenset())

    def toggle_bookmark(self, event_id: int) -> None:
        current = self.bookmarks.get()
        if event_id in current:
            self.bookmarks.set(current - {event_id})
        else:
            self.bookmarks.set(current | {event_id})

    def set_bookmarks(self, event_ids: Iterable[int]) -> None:
        self.bookmarks.set(frozenset(event_ids))

    def _conference(self) -> Resource:
        conference = self.database.conference.get()
        if conference is None:
            return Resource.init()
        return Resource.success(conference)

    def _collection(
        self,
        query: Callable[[Conference], Observable],
        decorate: Optional[Callable[[List[Any], Any], List[Any]]] = None,
        state: Optional[Observable] = None
    ) -> Resource:
        """
        Wrap one store collection of the current conference in a Resource.

        Args:
            query: Store query returning the collection observable
            decorate: Builds the published records from records and state
            state: UI state applied to the records by `decorate`

        Returns:
            Resource of the records, or the collection's own loading or
            error state
        """
        conference = self.database.conference.get()
        if conference is None:
            return Resource.init()

        resource = query(conference).get()
        if not resource.is_success or decorate is None:
            return resource
        return Resource.success(decorate(resource.data or [], state.get()))

    def _schedule(self) -> Resource:
        if self.database.conference.get() is None:
            return Resource.init()

        events = self.events.get()
        if events.status is Status.ERROR:
            logger.error(f"Schedule unavailable: {events.message}")
            return Resource.error(events.message)
        if not events.is_success:
            return Resource.loading()
        return Resource.success(compute_schedule(events.data or [], _data_of(self.types.get())))

    def _search(self) -> Resource:
        if self.database.conference.get() is None:
            return Resource.init()

        found = compute_search(
            self.query.get(),
            _data_of(self.events.get()),
            _data_of(self.locations.get()),
            _data_of(self.speakers.get())
        )
        return Resource.success(found)

    def _days(self) -> list:
        resource = self.conference.get()
        return conference_days(resource.data) if resource.is_success else []


def _data_of(resource: Optional[Resource]) -> list:
    if resource is None or not resource.is_success or resource.data is None:
        return []
    return resource.data
