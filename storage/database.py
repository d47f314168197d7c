"""Change-notifying access to conference records."""
import logging
from typing import Callable, Dict, List, Optional, Tuple

from botocore.exceptions import ClientError
from snarfx import Observable, transaction

from processor.models import Conference, Resource
from storage.dynamodb_manager import DynamoDBManager

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store query failed."""


class ConferenceDatabase:
    """
    Observable view over the conference table.

    `conference` holds the resolved conference, or None while unresolved.
    Collection queries return one cached observable per conference and
    record kind. Each holds a Resource: the records on success, or an error
    carrying a message when the read failed. `refresh` pushes fresh values
    into them.
    """

    KINDS = ('types', 'locations', 'speakers', 'articles', 'events')

    def __init__(self, manager: DynamoDBManager):
        """
        Args:
            manager: Table access used for every query
        """
        self.manager = manager
        self.conference: Observable = Observable(None)
        self._queries: Dict[Tuple[str, int], Observable] = {}

    def load_conference(self, conference_id: int) -> Optional[Conference]:
        """
        Resolve a conference and publish it.

        Args:
            conference_id: Conference identifier

        Returns:
            The conference, or None when it does not exist

        Raises:
            StoreError: The conference could not be read
        """
        try:
            conference = self.manager.get_conference(conference_id)
        except ClientError as e:
            logger.error(f"Failed to load conference {conference_id}: {e}")
            raise StoreError(f"Unable to load conference {conference_id}") from e

        self.conference.set(conference)
        return conference

    def get_types(self, conference: Conference) -> Observable:
        return self._query('types', conference)

    def get_locations(self, conference: Conference) -> Observable:
        return self._query('locations', conference)

    def get_speakers(self, conference: Conference) -> Observable:
        return self._query('speakers', conference)

    def get_articles(self, conference: Conference) -> Observable:
        return self._query('articles', conference)

    def get_events(self, conference: Conference) -> Observable:
        return self._query('events', conference)

    def refresh(self, conference: Conference) -> None:
        """
        Re-read every collection already queried for a conference.

        A failed read replaces that collection's value with an error
        Resource; the other collections still update.
        """
        with transaction():
            for kind in self.KINDS:
                observable = self._queries.get((kind, conference.id))
                if observable is not None:
                    observable.set(self._fetch(kind, conference))

    def _query(self, kind: str, conference: Conference) -> Observable:
        key = (kind, conference.id)
        observable = self._queries.get(key)
        if observable is None:
            observable = Observable(self._fetch(kind, conference))
            self._queries[key] = observable
        return observable

    def _fetch(self, kind: str, conference: Conference) -> Resource:
        reader: Callable[[int], List] = getattr(self.manager, f"get_{kind}")
        try:
            return Resource.success(reader(conference.id))
        except ClientError as e:
            logger.error(f"Failed to load {kind} for conference {conference.id}: {e}")
            return Resource.error(f"Unable to load {kind}")
