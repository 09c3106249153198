"""iCalendar (VCALENDAR/VEVENT) export for club events."""
import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from records.models import Event

PRODID = '-//Astoria Yacht Club//Events//EN'
UID_DOMAIN = 'astoriayachtclub.org'
MAX_LINE_OCTETS = 75
CRLF = '\r\n'


def format_ics_datetime(value: datetime) -> str:
    """
    Render a timestamp in UTC basic format (YYYYMMDDTHHMMSSZ).

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y%m%dT%H%M%SZ')


def escape_text(text: str) -> str:
    """Escape backslash, comma, semicolon and newline for a TEXT value."""
    text = text.replace('\\', '\\\\')
    text = text.replace(',', '\\,').replace(';', '\\;')
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return text.replace('\n', '\\n')


def fold_line(line: str) -> str:
    """
    Fold a content line so no physical line exceeds 75 octets.

    Continuation lines start with a single space. Characters are never
    split across lines.
    """
    if len(line.encode('utf-8')) <= MAX_LINE_OCTETS:
        return line

    parts = []
    current = ''
    current_octets = 0
    limit = MAX_LINE_OCTETS
    for char in line:
        char_octets = len(char.encode('utf-8'))
        if current_octets + char_octets > limit:
            parts.append(current)
            current = ''
            current_octets = 0
            # continuation lines lose one octet to the leading space
            limit = MAX_LINE_OCTETS - 1
        current += char
        current_octets += char_octets
    parts.append(current)
    return (CRLF + ' ').join(parts)


def _vevent_lines(
    event: Event,
    domain: str,
    dtstamp: Optional[datetime]
) -> List[str]:
    lines = [
        'BEGIN:VEVENT',
        f'UID:{event.event_id}@{domain}',
    ]
    if dtstamp is not None:
        lines.append(f'DTSTAMP:{format_ics_datetime(dtstamp)}')
    lines.extend([
        f'DTSTART:{format_ics_datetime(event.start)}',
        f'DTEND:{format_ics_datetime(event.end)}',
        f'SUMMARY:{escape_text(event.title)}',
        f'DESCRIPTION:{escape_text(event.description)}',
        f'LOCATION:{escape_text(event.location) if event.location else ""}',
        'END:VEVENT',
    ])
    return lines


def generate_ics_feed(
    events: Iterable[Event],
    domain: str = UID_DOMAIN,
    dtstamp: Optional[datetime] = None
) -> str:
    """
    Build one VCALENDAR holding a VEVENT per event.

    Args:
        events: Events to export, in output order
        domain: Suffix for each event UID
        dtstamp: Optional creation instant emitted as DTSTAMP

    Returns:
        CRLF-delimited calendar text ending in CRLF
    """
    lines = [
        'BEGIN:VCALENDAR',
        'VERSION:2.0',
        f'PRODID:{PRODID}',
    ]
    for event in events:
        lines.extend(_vevent_lines(event, domain, dtstamp))
    lines.append('END:VCALENDAR')
    return CRLF.join(fold_line(line) for line in lines) + CRLF


def generate_ics(
    event: Event,
    domain: str = UID_DOMAIN,
    dtstamp: Optional[datetime] = None
) -> str:
    """Build the calendar file for a single event."""
    return generate_ics_feed([event], domain=domain, dtstamp=dtstamp)


def ics_filename(event: Event) -> str:
    """Download filename: title with whitespace runs as dashes, lowercased."""
    return re.sub(r'\s+', '-', event.title).lower() + '.ics'
