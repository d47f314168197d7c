"""DynamoDB manager for conference data."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from processor.models import Article, Conference, Event, Location, Speaker, Type

logger = logging.getLogger(__name__)

CONFERENCE_KEY = 'CONFERENCE'
TYPE_PREFIX = 'TYPE#'
LOCATION_PREFIX = 'LOCATION#'
SPEAKER_PREFIX = 'SPEAKER#'
ARTICLE_PREFIX = 'ARTICLE#'
EVENT_PREFIX = 'EVENT#'


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO 8601 timestamp; values without an offset are UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class DynamoDBManager:
    """
    Manager for DynamoDB operations.

    All records of a conference share the partition key `conference_id`;
    the sort key `item_key` names the record kind and id, e.g. `EVENT#12`.
    """

    BATCH_SIZE = 25  # DynamoDB batch operation limit

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB client and table reference.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized DynamoDBManager for table: {table_name}")

    def get_conference(self, conference_id: int) -> Optional[Conference]:
        """
        Fetch the conference record.

        Args:
            conference_id: Conference identifier

        Returns:
            Conference, or None when the table holds no such conference
        """
        try:
            response = self.table.get_item(
                Key={'conference_id': conference_id, 'item_key': CONFERENCE_KEY}
            )
        except ClientError as e:
            logger.error(f"Error reading conference {conference_id}: {e}")
            raise

        item = response.get('Item')
        if item is None:
            logger.info(f"Conference {conference_id} not found")
            return None
        return self._item_to_conference(item)

    def get_types(self, conference_id: int) -> List[Type]:
        items = self._query_items(conference_id, TYPE_PREFIX)
        return self._convert(items, self._item_to_type)

    def get_locations(self, conference_id: int) -> List[Location]:
        items = self._query_items(conference_id, LOCATION_PREFIX)
        return self._convert(items, self._item_to_location)

    def get_speakers(self, conference_id: int) -> List[Speaker]:
        items = self._query_items(conference_id, SPEAKER_PREFIX)
        return self._convert(items, self._item_to_speaker)

    def get_articles(self, conference_id: int) -> List[Article]:
        items = self._query_items(conference_id, ARTICLE_PREFIX)
        return self._convert(items, self._item_to_article)

    def get_events(self, conference_id: int) -> List[Event]:
        """
        Fetch all events of a conference with their type and location.

        Events referencing an unknown type or location are skipped.

        Args:
            conference_id: Conference identifier

        Returns:
            Events ordered by start time
        """
        types = {t.id: t for t in self.get_types(conference_id)}
        locations = {loc.id: loc for loc in self.get_locations(conference_id)}
        items = self._query_items(conference_id, EVENT_PREFIX)

        events = []
        for item in items:
            event = self._item_to_event(item, types, locations)
            if event:
                events.append(event)

        events.sort(key=lambda e: e.start)
        logger.info(
            f"Retrieved {len(events)} events for conference {conference_id}"
        )
        return events

    def put_conference(self, conference: Conference) -> None:
        """
        Write the conference record.

        Args:
            conference: Conference to store
        """
        try:
            self.table.put_item(Item=self._conference_to_item(conference))
        except ClientError as e:
            logger.error(f"Error writing conference {conference.id}: {e}")
            raise

    def batch_write_items(self, conference_id: int, records: List[Any]) -> int:
        """
        Import conference records into the table in batches of 25 items.

        This is the ingestion path for a conference dataset: the schedule
        views only read, so the table is filled through this method and
        `put_conference`.

        Args:
            conference_id: Conference the records belong to
            records: Type, Location, Speaker, Article or Event objects

        Returns:
            Count of successfully written records
        """
        if not records:
            return 0

        logger.info(f"Writing {len(records)} records to DynamoDB")
        success_count = 0

        # Process in batches of 25 (DynamoDB limit)
        for i in range(0, len(records), self.BATCH_SIZE):
            batch = records[i:i + self.BATCH_SIZE]

            try:
                with self.table.batch_writer() as writer:
                    for record in batch:
                        item = self._record_to_item(conference_id, record)
                        writer.put_item(Item=item)
                        success_count += 1

            except ClientError as e:
                logger.error(
                    f"Error writing batch {i // self.BATCH_SIZE + 1}: {e}"
                )
                # Continue processing remaining batches
                continue

        logger.info(f"Successfully wrote {success_count} records")
        return success_count

    def _query_items(self, conference_id: int, prefix: str) -> List[dict]:
        """
        Query every item of one kind for a conference.

        Args:
            conference_id: Conference identifier
            prefix: Sort key prefix of the record kind

        Returns:
            Raw DynamoDB items
        """
        condition = (
            Key('conference_id').eq(conference_id) &
            Key('item_key').begins_with(prefix)
        )
        try:
            response = self.table.query(KeyConditionExpression=condition)
            items = response.get('Items', [])

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                response = self.table.query(
                    KeyConditionExpression=condition,
                    ExclusiveStartKey=response['LastEvaluatedKey']
                )
                items.extend(response.get('Items', []))

            logger.debug(
                f"Queried {len(items)} {prefix.rstrip('#').lower()} items "
                f"for conference {conference_id}"
            )
            return items

        except ClientError as e:
            logger.error(f"Error querying DynamoDB table: {e}")
            raise

    def _convert(self, items: List[dict], converter) -> list:
        records = []
        for item in items:
            record = converter(item)
            if record is not None:
                records.append(record)
        return records

    def _item_to_conference(self, item: dict) -> Optional[Conference]:
        try:
            return Conference(
                id=int(item['conference_id']),
                name=item['name'],
                start_date=parse_timestamp(item['start_date']),
                end_date=parse_timestamp(item['end_date'])
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Conference: {e}")
            return None

    def _item_to_type(self, item: dict) -> Optional[Type]:
        try:
            return Type(
                id=int(item['id']),
                name=item['name'],
                is_bookmark=bool(item.get('is_bookmark', False))
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Type: {e}")
            return None

    def _item_to_location(self, item: dict) -> Optional[Location]:
        try:
            return Location(id=int(item['id']), name=item['name'])
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Location: {e}")
            return None

    def _item_to_speaker(self, item: dict) -> Optional[Speaker]:
        try:
            return Speaker(
                id=int(item['id']),
                name=item['name'],
                description=item.get('description', '')
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Speaker: {e}")
            return None

    def _item_to_article(self, item: dict) -> Optional[Article]:
        try:
            return Article(
                id=int(item['id']),
                name=item['name'],
                text=item.get('text', '')
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Article: {e}")
            return None

    def _item_to_event(
        self,
        item: dict,
        types: Dict[int, Type],
        locations: Dict[int, Location]
    ) -> Optional[Event]:
        """
        Convert DynamoDB item to Event object.

        Args:
            item: DynamoDB item dictionary
            types: Known types by id
            locations: Known locations by id

        Returns:
            Event object or None if conversion fails
        """
        try:
            type_id = int(item['type_id'])
            location_id = int(item['location_id'])
            if type_id not in types or location_id not in locations:
                logger.warning(
                    f"Event {item['id']} references unknown type {type_id} "
                    f"or location {location_id}"
                )
                return None

            end = item.get('end')
            return Event(
                id=int(item['id']),
                title=item['title'],
                description=item.get('description', ''),
                start=parse_timestamp(item['start']),
                end=parse_timestamp(end) if end else None,
                type=types[type_id],
                location=locations[location_id]
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to Event: {e}")
            return None

    def _conference_to_item(self, conference: Conference) -> dict:
        return {
            'conference_id': conference.id,
            'item_key': CONFERENCE_KEY,
            'name': conference.name,
            'start_date': conference.start_date.isoformat(),
            'end_date': conference.end_date.isoformat()
        }

    def _record_to_item(self, conference_id: int, record: Any) -> dict:
        """
        Convert a conference record to a DynamoDB item.

        Args:
            conference_id: Conference the record belongs to
            record: Type, Location, Speaker, Article or Event object

        Returns:
            DynamoDB item dictionary
        """
        item = {'conference_id': conference_id, 'id': record.id}

        if isinstance(record, Event):
            item['item_key'] = f"{EVENT_PREFIX}{record.id}"
            item['title'] = record.title
            item['description'] = record.description
            item['start'] = record.start.isoformat()
            item['type_id'] = record.type.id
            item['location_id'] = record.location.id
            # Add optional fields if present
            if record.end:
                item['end'] = record.end.isoformat()
        elif isinstance(record, Type):
            item['item_key'] = f"{TYPE_PREFIX}{record.id}"
            item['name'] = record.name
            item['is_bookmark'] = record.is_bookmark
        elif isinstance(record, Location):
            item['item_key'] = f"{LOCATION_PREFIX}{record.id}"
            item['name'] = record.name
        elif isinstance(record, Speaker):
            item['item_key'] = f"{SPEAKER_PREFIX}{record.id}"
            item['name'] = record.name
            item['description'] = record.description
        elif isinstance(record, Article):
            item['item_key'] = f"{ARTICLE_PREFIX}{record.id}"
            item['name'] = record.name
            item['text'] = record.text
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

        return item
