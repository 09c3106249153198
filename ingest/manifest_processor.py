"""Manifest processor for validating and normalizing raw event and photo data."""
import logging
from datetime import date, datetime, tzinfo
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from records.models import (
    Event,
    EventCategory,
    Photo,
    PhotoAlbum,
    RecordStore,
)

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest does not have the expected structure."""


class ManifestProcessor:
    """Processor turning raw manifest entries into typed records."""

    MAX_TITLE_LENGTH = 200
    MAX_DESCRIPTION_LENGTH = 2000

    def __init__(self, tz: tzinfo):
        """
        Initialize the processor.

        Args:
            tz: Timezone applied to timestamps that carry no offset
        """
        self.tz = tz

    def process_manifest(self, manifest: Any) -> RecordStore:
        """
        Build a record store from a raw manifest.

        Args:
            manifest: Decoded JSON object with 'events' and 'photos' lists

        Returns:
            RecordStore holding every valid event and photo

        Raises:
            ManifestError: If the manifest or its collections have the
                wrong shape
        """
        if not isinstance(manifest, dict):
            raise ManifestError(
                f"Manifest must be an object, got {type(manifest).__name__}"
            )

        raw_events = manifest.get('events', [])
        raw_photos = manifest.get('photos', [])
        for name, value in (('events', raw_events), ('photos', raw_photos)):
            if not isinstance(value, list):
                raise ManifestError(f"Manifest '{name}' must be a list")

        return RecordStore(
            events=tuple(self.process_events(raw_events)),
            photos=tuple(self.process_photos(raw_photos))
        )

    def process_events(self, raw_events: List[Dict[str, Any]]) -> List[Event]:
        """
        Process and validate raw event entries.

        Invalid entries and repeated IDs are skipped with a warning.

        Args:
            raw_events: List of raw event dicts from a manifest

        Returns:
            List of validated Event objects in manifest order
        """
        events = []
        seen_ids = set()

        for raw in raw_events:
            try:
                event = self._process_single_event(raw)
            except Exception as e:
                logger.warning(f"Failed to process event entry {raw!r}: {e}")
                continue
            if event is None:
                continue
            if event.event_id in seen_ids:
                logger.warning(f"Skipping duplicate event id '{event.event_id}'")
                continue
            seen_ids.add(event.event_id)
            events.append(event)

        logger.info(
            f"Processed {len(events)} valid events out of "
            f"{len(raw_events)} total events"
        )
        return events

    def process_photos(self, raw_photos: List[Dict[str, Any]]) -> List[Photo]:
        """
        Process and validate raw photo entries.

        Args:
            raw_photos: List of raw photo dicts from a manifest

        Returns:
            List of validated Photo objects in manifest order
        """
        photos = []
        seen_ids = set()

        for raw in raw_photos:
            try:
                photo = self._process_single_photo(raw)
            except Exception as e:
                logger.warning(f"Failed to process photo entry {raw!r}: {e}")
                continue
            if photo is None:
                continue
            if photo.photo_id in seen_ids:
                logger.warning(f"Skipping duplicate photo id '{photo.photo_id}'")
                continue
            seen_ids.add(photo.photo_id)
            photos.append(photo)

        logger.info(
            f"Processed {len(photos)} valid photos out of "
            f"{len(raw_photos)} total photos"
        )
        return photos

    def _process_single_event(self, raw: Dict[str, Any]) -> Optional[Event]:
        if not self._has_fields(raw, ('id', 'title', 'start', 'end')):
            return None

        start = self._parse_datetime(raw['start'])
        end = self._parse_datetime(raw['end'])
        if start is None or end is None:
            logger.warning(
                f"Invalid timestamp for event '{raw['id']}': "
                f"{raw['start']!r} / {raw['end']!r}"
            )
            return None
        if end < start:
            logger.warning(f"Event '{raw['id']}' ends before it starts")
            return None

        category_value = raw.get('category', raw.get('type'))
        try:
            category = EventCategory(category_value)
        except ValueError:
            logger.warning(
                f"Unknown category for event '{raw['id']}': {category_value!r}"
            )
            return None

        description = self._plain_text(raw.get('description') or '')
        location = self._plain_text(raw.get('location') or '') or None

        return Event(
            event_id=str(raw['id']),
            title=self._plain_text(raw['title'])[:self.MAX_TITLE_LENGTH],
            start=start,
            end=end,
            category=category,
            description=description[:self.MAX_DESCRIPTION_LENGTH],
            location=location,
            registration_required=bool(raw.get('registrationRequired', False)),
            registration_url=raw.get('registrationUrl') or None,
            recurrence=raw.get('recurrence') or None
        )

    def _process_single_photo(self, raw: Dict[str, Any]) -> Optional[Photo]:
        required = ('id', 'src', 'width', 'height', 'alt', 'title', 'album', 'date')
        if not self._has_fields(raw, required):
            return None

        width = int(raw['width'])
        height = int(raw['height'])
        if width <= 0 or height <= 0:
            logger.warning(
                f"Photo '{raw['id']}' has non-positive dimensions "
                f"{width}x{height}"
            )
            return None

        try:
            album = PhotoAlbum(raw['album'])
        except ValueError:
            logger.warning(f"Unknown album for photo '{raw['id']}': {raw['album']!r}")
            return None

        captured_on = self._normalize_date(str(raw['date']))
        if captured_on is None:
            logger.warning(f"Invalid date for photo '{raw['id']}': {raw['date']!r}")
            return None

        caption = self._plain_text(raw.get('caption') or '') or None

        return Photo(
            photo_id=str(raw['id']),
            src=raw['src'],
            width=width,
            height=height,
            alt=raw['alt'],
            title=self._plain_text(raw['title'])[:self.MAX_TITLE_LENGTH],
            album=album,
            captured_on=captured_on,
            caption=caption[:self.MAX_DESCRIPTION_LENGTH] if caption else None,
            photographer=raw.get('photographer') or None
        )

    def _has_fields(self, raw: Dict[str, Any], fields) -> bool:
        """
        Validate that required fields are present and non-empty.

        Args:
            raw: Raw manifest entry
            fields: Names of required keys

        Returns:
            True if valid, False otherwise
        """
        for name in fields:
            value = raw.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                logger.warning(
                    f"Entry '{raw.get('id', '?')}' missing required field: {name}"
                )
                return False
        return True

    def _parse_datetime(self, value: Any) -> Optional[datetime]:
        """
        Parse an ISO 8601 timestamp, applying the club timezone when naive.

        Returns:
            Timezone-aware datetime or None if parsing fails
        """
        if isinstance(value, datetime):
            parsed = value
        else:
            text = str(value).strip()
            if text.endswith('Z'):
                text = text[:-1] + '+00:00'
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                return None

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self.tz)
        return parsed

    def _normalize_date(self, date_str: str) -> Optional[date]:
        """
        Parse a capture date in one of the common formats.

        Args:
            date_str: Date string in various formats

        Returns:
            date object or None if parsing fails
        """
        date_formats = [
            '%Y-%m-%d',      # ISO 8601
            '%m/%d/%Y',      # US format
            '%m-%d-%Y',      # US format with dashes
            '%B %d, %Y',     # Full month name
            '%b %d, %Y',     # Abbreviated month name
            '%Y/%m/%d',      # Alternative ISO format
        ]

        text = date_str.strip()
        # Full timestamps keep only their date part
        if 'T' in text:
            text = text.split('T', 1)[0]

        for fmt in date_formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        return None

    def _plain_text(self, value: str) -> str:
        """Reduce CMS rich text (HTML) to plain text."""
        text = str(value)
        if '<' not in text:
            return text.strip()
        return BeautifulSoup(text, 'html.parser').get_text(' ', strip=True)
