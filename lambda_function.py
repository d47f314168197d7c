"""AWS Lambda handler for the conference schedule and search views."""
import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from processor.day_index import ScheduleNavigator
from processor.models import Status
from processor.serialization import serialize, serialize_list
from processor.tick_timer import TickTimer
from processor.view_model import ConferenceViewModel
from storage.database import ConferenceDatabase, StoreError
from storage.dynamodb_manager import DynamoDBManager, parse_timestamp


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create new handler with JSON formatter
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    # Set log level
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _parse_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    return parse_timestamp(value)


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {'statusCode': status_code, 'body': json.dumps(body)}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Serve the filtered schedule and search results of one conference.

    Payload keys (all optional): conference_id, query, selected_types,
    bookmarks, bookmarked_only, now (ISO 8601).

    Args:
        event: Invocation payload
        context: Lambda context object

    Returns:
        Response dict with statusCode and the derived views
    """
    # Read configuration from environment variables
    table_name = os.environ.get('TABLE_NAME', 'conference-schedule')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    default_conference = os.environ.get('CONFERENCE_ID')
    tick_interval = int(os.environ.get('TICK_INTERVAL_SECONDS', '60'))

    # Initialize logging
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    event = event or {}
    start_time = time.time()

    try:
        conference_id = event.get('conference_id', default_conference)
        if conference_id is None:
            return _response(400, {'message': 'No conference_id given'})
        conference_id = int(conference_id)

        logger.info(
            "Schedule request started",
            extra={'table_name': table_name, 'conference_id': conference_id}
        )

        # Instantiate components
        database = ConferenceDatabase(DynamoDBManager(table_name=table_name))
        view_model = ConferenceViewModel(database)
        navigator = ScheduleNavigator()
        timer = TickTimer(interval_seconds=tick_interval)

        try:
            database.load_conference(conference_id)
        except StoreError as e:
            logger.error(
                f"Failed to load conference: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            duration = time.time() - start_time
            return _response(500, {
                'message': 'Failed to load conference',
                'error': str(e),
                'error_type': type(e).__name__,
                'duration_seconds': round(duration, 2)
            })

        conference = view_model.conference.get()
        if conference.status is Status.NOT_INITIALIZED:
            return _response(404, {
                'message': f"Conference {conference_id} not found",
                'status': conference.status.value
            })

        # Apply UI commands
        view_model.set_bookmarks(event.get('bookmarks') or [])
        for type_id in event.get('selected_types') or []:
            view_model.set_type_selected(int(type_id), True)
        view_model.set_bookmarked_only(bool(event.get('bookmarked_only')))
        view_model.on_query_text_change(event.get('query'))

        now = _parse_now(event.get('now'))
        ticks = navigator.watch(timer.observable)
        schedule = view_model.schedule.get()
        scroll_position = navigator.on_schedule(schedule, now=now)
        timer.tick(now)
        ticks.dispose()

        search = view_model.search.get()
        duration = time.time() - start_time
        logger.info(
            "Schedule request completed",
            extra={
                'duration_seconds': round(duration, 2),
                'schedule_status': schedule.status.value,
                'schedule_events': len(schedule.data or []),
                'search_results': len(search.data or [])
            }
        )

        return _response(200, {
            'conference': serialize(conference.data),
            'days': [day.isoformat() for day in view_model.days.get()],
            'types': serialize_list(view_model.types.get().data or []),
            'schedule': {
                'status': schedule.status.value,
                'message': schedule.message,
                'rows': serialize_list(navigator.rows)
            },
            'scroll_position': scroll_position,
            'show_empty': navigator.show_empty,
            'search': serialize_list(search.data or []),
            'duration_seconds': round(duration, 2)
        })

    except Exception as e:
        # Calculate execution duration
        duration = time.time() - start_time

        # Log error
        logger.error(
            f"Schedule request failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        # Return error response
        return _response(500, {
            'message': 'Schedule request failed',
            'error': str(e),
            'error_type': type(e).__name__,
            'duration_seconds': round(duration, 2)
        })
