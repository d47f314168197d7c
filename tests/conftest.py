"""Shared fixtures: a small three-day conference."""
from datetime import datetime, timezone

import pytest

from processor.models import Article, Conference, Event, Location, Speaker, Type


def at(day: int, hour: int, minute: int = 0, month: int = 8) -> datetime:
    return datetime(2024, month, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def sample_conference():
    """Conference running from Aug 8 to Aug 11."""
    return Conference(id=1, name='DEF CON 32', start_date=at(8, 0), end_date=at(11, 0))


@pytest.fixture
def sample_types():
    """Two real categories."""
    return [
        Type(id=1, name='Talk'),
        Type(id=2, name='Workshop'),
    ]


@pytest.fixture
def sample_locations():
    return [
        Location(id=10, name='Track 1'),
        Location(id=11, name='Hall A'),
    ]


@pytest.fixture
def sample_speakers():
    return [
        Speaker(id=100, name='Alice Smith', description='Hardware hacker'),
        Speaker(id=101, name='Bob Jones', description='Writes about lockpicking'),
    ]


@pytest.fixture
def sample_articles():
    return [Article(id=500, name='Badge pickup', text='Registration opens at 8')]


@pytest.fixture
def sample_events(sample_types, sample_locations):
    """Four events across two days, in start order."""
    talk, workshop = sample_types
    track, hall = sample_locations
    return [
        Event(
            id=1000,
            title='Opening Keynote',
            description='Welcome to the conference',
            start=at(8, 10),
            end=at(8, 11),
            type=talk,
            location=track
        ),
        Event(
            id=1001,
            title='Lockpicking 101',
            description='Hands-on lock workshop',
            start=at(8, 10),
            end=at(8, 12),
            type=workshop,
            location=hall
        ),
        Event(
            id=1002,
            title='Badge Hacking',
            description='Reverse engineering the badge',
            start=at(9, 14),
            end=at(9, 15),
            type=talk,
            location=hall
        ),
        Event(
            id=1003,
            title='Soldering Basics',
            description='Learn to solder',
            start=at(10, 9),
            end=at(10, 11),
            type=workshop,
            location=track
        ),
    ]
