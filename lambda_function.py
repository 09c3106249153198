"""AWS Lambda handler serving the club events calendar and photo gallery."""
import json
import logging
import os
import re
import time
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Dict, Optional

import requests
from botocore.exceptions import ClientError

from ingest.manifest_processor import ManifestError
from ingest.store_loader import ConfigurationError, load_record_store
from projection.ics_export import generate_ics, generate_ics_feed, ics_filename
from projection.views import build_calendar, build_list_rows
from query.event_query import apply_event_query, partition_events
from query.params import (
    InvalidQueryError,
    parse_anchor_date,
    parse_calendar_view,
    parse_event_query,
    parse_photo_query,
)
from query.photo_query import apply_photo_query
from records.catalog import ALBUM_LABELS, CLUB_TIMEZONE, club_timezone
from records.models import PhotoAlbum, RecordStore

_EVENT_ICS_PATH = re.compile(r'^/events/([^/]+)\.ics$')
_WHEN_VALUES = ('upcoming', 'past', 'all')

# Attributes every LogRecord has; anything else was passed through `extra`
_RESERVED_LOG_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any extra fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_LOG_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from environment variables."""
    log_level: str = 'INFO'
    manifest_source: str = 'builtin'
    manifest_url: Optional[str] = None
    manifest_bucket: Optional[str] = None
    manifest_key: Optional[str] = None
    timeout_seconds: int = 30
    club_timezone: str = CLUB_TIMEZONE


def load_settings() -> Settings:
    return Settings(
        log_level=os.environ.get('LOG_LEVEL', 'INFO'),
        manifest_source=os.environ.get('MANIFEST_SOURCE', 'builtin'),
        manifest_url=os.environ.get('MANIFEST_URL') or None,
        manifest_bucket=os.environ.get('MANIFEST_BUCKET') or None,
        manifest_key=os.environ.get('MANIFEST_KEY') or None,
        timeout_seconds=int(os.environ.get('TIMEOUT_SECONDS', '30')),
        club_timezone=os.environ.get('CLUB_TIMEZONE', CLUB_TIMEZONE)
    )


def _current_time() -> datetime:
    return datetime.now(timezone.utc)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(payload, default=_json_default)
    }


def _calendar_response(body: str, filename: str) -> Dict[str, Any]:
    return {
        'statusCode': 200,
        'headers': {
            'Content-Type': 'text/calendar; charset=utf-8',
            'Content-Disposition': f'attachment; filename="{filename}"'
        },
        'body': body
    }


def _error_response(
    status_code: int,
    message: str,
    error: Exception,
    start_time: float
) -> Dict[str, Any]:
    duration = time.time() - start_time
    return _json_response(status_code, {
        'message': message,
        'error': str(error),
        'error_type': type(error).__name__,
        'duration_seconds': round(duration, 2)
    })


def route_request(
    method: str,
    path: str,
    params: Dict[str, str],
    store: RecordStore,
    tz: tzinfo,
    now: datetime
) -> Dict[str, Any]:
    """
    Dispatch a request to the matching view.

    Args:
        method: HTTP method
        path: Request path
        params: Query string parameters
        store: Records to query
        tz: Display timezone
        now: Reference instant for upcoming/past and DTSTAMP

    Returns:
        API Gateway proxy response dict

    Raises:
        InvalidQueryError: If a query parameter has an unsupported value
    """
    if method.upper() != 'GET':
        return _json_response(405, {'message': f'Method {method} not allowed'})

    path = path.rstrip('/') or '/'

    if path == '/health':
        return _json_response(200, {'status': 'ok'})

    if path == '/events':
        when = (params.get('when') or 'all').lower()
        if when not in _WHEN_VALUES:
            raise InvalidQueryError(
                f"Invalid when {when!r}; expected one of: {', '.join(_WHEN_VALUES)}"
            )
        events = apply_event_query(store.events, parse_event_query(params))
        partition = partition_events(events, now)
        upcoming = partition.upcoming if when in ('upcoming', 'all') else ()
        past = partition.past if when in ('past', 'all') else ()
        return _json_response(200, {
            'upcoming': [asdict(row) for row in build_list_rows(upcoming, tz, now, now)],
            'past': [asdict(row) for row in build_list_rows(past, tz, now, now)],
            'total': len(events)
        })

    if path == '/events/calendar':
        today = now.astimezone(tz).date()
        view = parse_calendar_view(params.get('view'))
        anchor = parse_anchor_date(params.get('date'), today)
        events = apply_event_query(store.events, parse_event_query(params))
        grid = build_calendar(events, view, anchor, tz, today)
        return _json_response(200, asdict(grid))

    if path == '/events.ics':
        events = apply_event_query(store.events, parse_event_query(params))
        return _calendar_response(
            generate_ics_feed(events, dtstamp=now), 'astoria-yacht-club.ics'
        )

    match = _EVENT_ICS_PATH.match(path)
    if match:
        event = store.get_event(match.group(1))
        if event is None:
            return _json_response(
                404, {'message': f"Event '{match.group(1)}' not found"}
            )
        return _calendar_response(generate_ics(event, dtstamp=now), ics_filename(event))

    if path == '/gallery':
        query = parse_photo_query(params)
        photos = apply_photo_query(store.photos, query)
        return _json_response(200, {
            'photos': [asdict(photo) for photo in photos],
            'total': len(photos),
            'filtered': bool(query.albums) or bool(query.search)
        })

    if path == '/gallery/albums':
        albums = []
        for album in PhotoAlbum:
            albums.append({
                'album': album.value,
                'label': ALBUM_LABELS[album]['label'],
                'description': ALBUM_LABELS[album]['description'],
                'count': sum(1 for photo in store.photos if photo.album == album)
            })
        return _json_response(200, {'albums': albums})

    return _json_response(404, {'message': f'No route for {path}'})


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for the club events and gallery API.

    Args:
        event: API Gateway proxy event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode, headers and body
    """
    settings = load_settings()

    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    path = event.get('path') or event.get('rawPath') or '/'
    method = (
        event.get('httpMethod')
        or event.get('requestContext', {}).get('http', {}).get('method')
        or 'GET'
    )
    params = event.get('queryStringParameters') or {}

    logger.info(
        "Request started",
        extra={'path': path, 'method': method, 'manifest_source': settings.manifest_source}
    )

    try:
        tz = club_timezone(settings.club_timezone)
        now = _current_time()

        try:
            store = load_record_store(
                settings.manifest_source,
                tz=tz,
                today=now.astimezone(tz).date(),
                url=settings.manifest_url,
                bucket=settings.manifest_bucket,
                key=settings.manifest_key,
                timeout=settings.timeout_seconds
            )
        except (requests.RequestException, ClientError, ManifestError,
                ConfigurationError) as e:
            logger.error(
                f"Failed to load records: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(500, 'Failed to load records', e, start_time)

        try:
            response = route_request(method, path, params, store, tz, now)
        except InvalidQueryError as e:
            logger.warning(f"Rejected query parameters: {e}")
            return _error_response(400, 'Invalid query parameter', e, start_time)

        logger.info(
            "Request completed",
            extra={
                'path': path,
                'status_code': response['statusCode'],
                'duration_seconds': round(time.time() - start_time, 2)
            }
        )
        return response

    except Exception as e:
        logger.error(
            f"Request failed: {str(e)}",
            extra={
                'duration_seconds': round(time.time() - start_time, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _error_response(500, 'Request failed', e, start_time)
