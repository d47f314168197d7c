"""JSON-ready representations of schedule records."""
from datetime import date
from typing import Any, Dict, List, Union

from processor.models import Article, Conference, Day, Event, Location, Speaker, Time, Type


def _iso(value) -> Any:
    return value.isoformat() if isinstance(value, date) else value


def serialize(item: Any) -> Union[Dict[str, Any], str]:
    """
    Convert one record, marker or label to a JSON-compatible value.

    Args:
        item: Record from a schedule or search result list

    Returns:
        Dictionary tagged with its `kind`, or the label string itself
    """
    if isinstance(item, str):
        return item
    if isinstance(item, Event):
        return {
            'kind': 'event',
            'id': item.id,
            'title': item.title,
            'description': item.description,
            'start': _iso(item.start),
            'end': _iso(item.end),
            'type': item.type.name,
            'type_id': item.type.id,
            'location': item.location.name,
            'is_bookmarked': item.is_bookmarked
        }
    if isinstance(item, Type):
        return {
            'kind': 'type',
            'id': item.id,
            'name': item.name,
            'is_bookmark': item.is_bookmark,
            'is_selected': item.is_selected
        }
    if isinstance(item, Location):
        return {'kind': 'location', 'id': item.id, 'name': item.name}
    if isinstance(item, Speaker):
        return {
            'kind': 'speaker',
            'id': item.id,
            'name': item.name,
            'description': item.description
        }
    if isinstance(item, Article):
        return {'kind': 'article', 'id': item.id, 'name': item.name, 'text': item.text}
    if isinstance(item, Conference):
        return {
            'kind': 'conference',
            'id': item.id,
            'name': item.name,
            'start_date': _iso(item.start_date),
            'end_date': _iso(item.end_date)
        }
    if isinstance(item, Day):
        return {'kind': 'day', 'date': _iso(item.date)}
    if isinstance(item, Time):
        return {'kind': 'time', 'start': _iso(item.start)}
    raise TypeError(f"Cannot serialize {type(item).__name__}")


def serialize_list(items: List[Any]) -> List[Union[Dict[str, Any], str]]:
    return [serialize(item) for item in items]
