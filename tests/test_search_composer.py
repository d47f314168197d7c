"""Unit tests for search result grouping."""
from dataclasses import replace
from datetime import datetime, timezone

from processor.models import Event, Location, Speaker
from processor.search_composer import EVENTS_LABEL, SPEAKERS_LABEL, compute_search


def at(day, hour):
    return datetime(2024, 8, day, hour, tzinfo=timezone.utc)


class TestComputeSearch:
    """Test cases for compute_search."""

    def test_empty_query(self, sample_events, sample_locations, sample_speakers):
        """Test that an empty query has no results."""
        assert compute_search("", sample_events, sample_locations, sample_speakers) == []

    def test_whitespace_query(self, sample_events, sample_locations, sample_speakers):
        """Test that a blank query has no results."""
        assert compute_search("   ", sample_events, sample_locations, sample_speakers) == []

    def test_none_query(self, sample_events, sample_locations, sample_speakers):
        """Test that a missing query has no results."""
        assert compute_search(None, sample_events, sample_locations, sample_speakers) == []

    def test_speaker_name_match(self):
        """Test a case-insensitive speaker name match."""
        alice = Speaker(id=1, name="Alice")

        assert compute_search("alice", [], [], [alice]) == [SPEAKERS_LABEL, alice]

    def test_matching_is_character_wise(self):
        """Test that case folding does not expand characters."""
        street = Speaker(id=1, name="Straße")

        assert compute_search("strasse", [], [], [street]) == []
        assert compute_search("STRASSE", [], [], [Speaker(id=2, name="Strasse")])[0] == SPEAKERS_LABEL
        assert compute_search("STRAẞE", [], [], [street]) == [SPEAKERS_LABEL, street]

    def test_speaker_description_match(self, sample_speakers):
        """Test that speaker descriptions are searched."""
        results = compute_search("LOCKPICKING", [], [], sample_speakers)

        assert results == [SPEAKERS_LABEL, sample_speakers[1]]

    def test_location_lists_events_by_start(self, sample_types):
        """Test that a matched location is followed by its events, earliest first."""
        hall = Location(id=1, name="Hall A")
        late = Event(
            id=2, title="Late", description="", start=at(8, 15), end=None,
            type=sample_types[0], location=hall
        )
        early = Event(
            id=3, title="Early", description="", start=at(8, 9), end=None,
            type=sample_types[0], location=hall
        )

        results = compute_search("hall a", [late, early], [hall], [])

        assert results == [hall, early, late]

    def test_location_includes_non_matching_events(self, sample_events, sample_locations):
        """Test that every event at a matched location is listed."""
        hall = sample_locations[1]

        results = compute_search("hall", sample_events, sample_locations, [])

        assert results[0] == hall
        assert [e.id for e in results[1:]] == [1001, 1002]

    def test_location_events_matched_by_name(self, sample_events, sample_locations):
        """Test that events are attached to a location by name, not identity."""
        renamed = Location(id=99, name="Hall A")

        results = compute_search("hall", sample_events, [renamed], [])

        assert results[0] == renamed
        assert [e.id for e in results[1:]] == [1001, 1002]

    def test_event_title_and_description_match(self, sample_events):
        """Test that event titles and descriptions are searched."""
        results = compute_search("badge", sample_events, [], [])

        assert results == [EVENTS_LABEL, sample_events[2]]

        results = compute_search("welcome", sample_events, [], [])

        assert results == [EVENTS_LABEL, sample_events[0]]

    def test_events_keep_input_order(self, sample_events):
        """Test that matched events are not re-sorted."""
        reversed_events = list(reversed(sample_events))

        results = compute_search("o", reversed_events, [], [])

        assert results[0] == EVENTS_LABEL
        assert results[1:] == [e for e in reversed_events if "o" in (e.title + e.description).lower()]

    def test_group_order(self, sample_events, sample_types):
        """Test that speakers come first, then locations, then events."""
        hack_space = Location(id=5, name="Hack Space")
        hacker = Speaker(id=7, name="Carol", description="Hacker at large")
        held = replace(sample_events[3], location=hack_space)
        events = sample_events[:3] + [held]

        results = compute_search("hack", events, [hack_space], [hacker])

        assert results == [
            SPEAKERS_LABEL, hacker,
            hack_space, held,
            EVENTS_LABEL, sample_events[2],
        ]

    def test_empty_groups_omitted(self, sample_events, sample_locations, sample_speakers):
        """Test that groups without matches emit no label."""
        results = compute_search("keynote", sample_events, sample_locations, sample_speakers)

        assert SPEAKERS_LABEL not in results
        assert results == [EVENTS_LABEL, sample_events[0]]

    def test_no_matches(self, sample_events, sample_locations, sample_speakers):
        """Test that an unmatched query yields an empty list."""
        assert compute_search("zzz", sample_events, sample_locations, sample_speakers) == []
