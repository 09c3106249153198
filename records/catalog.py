"""Built-in club manifest: events relative to a given day and gallery photos."""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from records.models import (
    Event,
    EventCategory,
    Photo,
    PhotoAlbum,
    RecordStore,
)

CLUB_TIMEZONE = 'America/Los_Angeles'

CATEGORY_LABELS: Dict[EventCategory, str] = {
    EventCategory.RACING: 'Racing',
    EventCategory.CRUISING: 'Cruising/Rally',
    EventCategory.SOCIAL: 'Social Event',
    EventCategory.MEETING: 'Board Meeting',
}

ALBUM_LABELS: Dict[PhotoAlbum, Dict[str, str]] = {
    PhotoAlbum.RACING: {
        'label': 'Racing',
        'description': 'Action shots from our racing programs',
    },
    PhotoAlbum.CRUISING: {
        'label': 'Cruising & Rallies',
        'description': 'Adventures on the water',
    },
    PhotoAlbum.SOCIAL: {
        'label': 'Social Events',
        'description': 'Club gatherings and celebrations',
    },
    PhotoAlbum.CLUBHOUSE: {
        'label': 'Clubhouse',
        'description': 'Our home on the waterfront',
    },
    PhotoAlbum.HISTORICAL: {
        'label': 'Historical Photos',
        'description': 'AYC through the years since 1931',
    },
}

_WEDNESDAY_RACING = (
    "Weekly beer can races open to all members. Skipper's meeting at 5:30 PM, "
    "first warning at 6:00 PM. All boats welcome!"
)
_BOARD_MEETING = (
    "Monthly board meeting. All members welcome to attend. "
    "Agenda posted one week prior."
)

# (id, title, start day offset, start hh:mm, end day offset, end hh:mm,
#  category, description, location, extra fields)
_EVENT_MANIFEST = [
    ('race-1', 'Wednesday Night Racing', 3, (18, 0), 3, (20, 30),
     EventCategory.RACING, _WEDNESDAY_RACING, 'AYC Starting Line',
     {'recurrence': 'Weekly on Wednesdays'}),
    ('race-2', 'Wednesday Night Racing', 10, (18, 0), 10, (20, 30),
     EventCategory.RACING, _WEDNESDAY_RACING, 'AYC Starting Line',
     {'recurrence': 'Weekly on Wednesdays'}),
    ('race-3', 'Spring Series Race #3', 6, (10, 0), 6, (15, 0),
     EventCategory.RACING,
     'Third race of the Spring Series. PHRF and one-design classes. '
     'Registration required by Thursday prior.',
     'Columbia River - West End Course',
     {'registration_required': True, 'registration_url': '/racing/register'}),
    ('race-4', 'RC Laser Racing', 7, (10, 0), 7, (12, 0),
     EventCategory.RACING,
     'Radio-controlled laser sailing. Bring your own boat or borrow a club '
     'boat. Great for all skill levels!',
     'AYC Dock', {}),
    ('race-5', 'Memorial Day Regatta', 21, (9, 0), 21, (17, 0),
     EventCategory.RACING,
     'Annual Memorial Day regatta featuring multiple classes. BBQ and awards '
     'ceremony to follow. One of our biggest events of the year!',
     'Columbia River',
     {'registration_required': True, 'registration_url': '/racing/register'}),
    ('race-6', 'Wednesday Night Racing', 17, (18, 0), 17, (20, 30),
     EventCategory.RACING, _WEDNESDAY_RACING, 'AYC Starting Line',
     {'recurrence': 'Weekly on Wednesdays'}),
    ('cruise-1', 'Sunset Cruise Rally', 5, (17, 0), 5, (21, 0),
     EventCategory.CRUISING,
     'Join fellow members for a leisurely sunset cruise on the Columbia. '
     'Meet at the dock at 5 PM. Dinner at anchor.',
     'Departing AYC Dock',
     {'registration_required': True, 'registration_url': '/events/register'}),
    ('cruise-2', 'Paddle & Picnic', 8, (11, 0), 8, (15, 0),
     EventCategory.CRUISING,
     'Kayaks, SUPs, and small boats welcome! Paddle to Cathlamet and enjoy a '
     'group picnic. All skill levels welcome.',
     'Meet at AYC Dock', {}),
    ('cruise-3', 'Weekend Cruise to Ilwaco', 14, (8, 0), 16, (17, 0),
     EventCategory.CRUISING,
     'Two-night cruise to Ilwaco with stops for sightseeing and group '
     'dinners. Great opportunity for newer cruisers to join experienced '
     'skippers.',
     'Ilwaco Marina',
     {'registration_required': True, 'registration_url': '/events/register'}),
    ('social-1', 'First Friday Social', 2, (17, 30), 2, (20, 0),
     EventCategory.SOCIAL,
     "Monthly social gathering at the clubhouse. Appetizers and drinks "
     "provided. Bring a dish to share if you'd like!",
     'AYC Clubhouse', {}),
    ('social-2', 'New Member Welcome BBQ', 9, (16, 0), 9, (19, 0),
     EventCategory.SOCIAL,
     'Special BBQ to welcome our newest members. Meet the board, learn about '
     'club activities, and connect with fellow sailors.',
     'AYC Clubhouse & Dock', {}),
    ('social-3', 'Summer Solstice Party', 25, (18, 0), 25, (22, 0),
     EventCategory.SOCIAL,
     'Celebrate the longest day of the year with food, music, and sunset '
     'views from the dock. Family friendly event!',
     'AYC Clubhouse', {}),
    ('social-4', "Captain's Dinner", 30, (18, 0), 30, (21, 0),
     EventCategory.SOCIAL,
     'Formal dinner honoring our racing skippers. Catered meal with awards '
     'presentation. RSVP required.',
     'AYC Clubhouse',
     {'registration_required': True, 'registration_url': '/events/register'}),
    ('meeting-1', 'Board of Directors Meeting', 4, (18, 30), 4, (20, 0),
     EventCategory.MEETING, _BOARD_MEETING, 'AYC Clubhouse', {}),
    ('meeting-2', 'Racing Committee Meeting', 11, (18, 0), 11, (19, 30),
     EventCategory.MEETING,
     'Planning meeting for upcoming racing season. Input from all racers '
     'welcome.',
     'AYC Clubhouse', {}),
    ('meeting-3', 'Board of Directors Meeting', 32, (18, 30), 32, (20, 0),
     EventCategory.MEETING, _BOARD_MEETING, 'AYC Clubhouse', {}),
    ('past-1', 'Opening Day Ceremony', -10, (10, 0), -10, (14, 0),
     EventCategory.SOCIAL,
     'Annual opening day celebration with boat parade and blessing of the '
     'fleet.',
     'AYC Dock', {}),
    ('past-2', 'Spring Series Race #1', -14, (10, 0), -14, (15, 0),
     EventCategory.RACING, 'First race of the Spring Series.',
     'Columbia River', {}),
    ('past-3', 'Spring Series Race #2', -7, (10, 0), -7, (15, 0),
     EventCategory.RACING, 'Second race of the Spring Series.',
     'Columbia River', {}),
]

_UNSPLASH = 'https://images.unsplash.com/{}?w=1200'

PHOTOS = (
    Photo('racing-1', _UNSPLASH.format('photo-1540946485063-a40da27545f8'),
          1200, 800, 'Sailboats racing on open water',
          'Wednesday Night Racing', PhotoAlbum.RACING, date(2024, 4, 10),
          caption='Boats jockey for position at the start line during our '
                  'weekly beer can races.',
          photographer='Mike Thompson'),
    Photo('racing-2', _UNSPLASH.format('photo-1534854638093-bada1813ca19'),
          1200, 1600, 'Yacht sailing in heavy wind', 'Spring Series Race #2',
          PhotoAlbum.RACING, date(2024, 4, 13),
          caption='Columbia Star heeling hard in the spring breeze.',
          photographer='Sarah Chen'),
    Photo('racing-3', _UNSPLASH.format('photo-1500930287596-c1ecaa373bb2'),
          1200, 800, 'Fleet of sailboats racing', 'Memorial Day Regatta Start',
          PhotoAlbum.RACING, date(2023, 5, 27),
          caption='The fleet heads upwind at the start of our annual '
                  'Memorial Day Regatta.'),
    Photo('racing-4', _UNSPLASH.format('photo-1502680390469-be75c86b636f'),
          1200, 900, 'Sailboat crew in action', 'Crew Work',
          PhotoAlbum.RACING, date(2024, 3, 15),
          caption='The crew of Windward executes a perfect jibe.'),
    Photo('racing-5', _UNSPLASH.format('photo-1559825481-12a05cc00344'),
          1200, 800, 'Sailboat at sunset during race', 'Golden Hour Racing',
          PhotoAlbum.RACING, date(2023, 7, 18),
          caption='Racing into the sunset during a long summer evening.'),
    Photo('racing-6', _UNSPLASH.format('photo-1474487548417-781cb71495f3'),
          1600, 1200, 'Racing marks and boats', 'Rounding the Mark',
          PhotoAlbum.RACING, date(2024, 4, 20),
          caption='Tight racing at the windward mark.'),
    Photo('cruising-1', _UNSPLASH.format('photo-1500514966906-fe245eea9344'),
          1200, 800, 'Yacht anchored in calm bay', 'Raft-Up at Cathlamet',
          PhotoAlbum.CRUISING, date(2023, 8, 5),
          caption='Club boats gather for a peaceful evening on the water.'),
    Photo('cruising-2', _UNSPLASH.format('photo-1544551763-46a013bb70d5'),
          1200, 1600, 'Sailboat at anchor with mountains',
          'Columbia River Gorge Cruise', PhotoAlbum.CRUISING,
          date(2023, 9, 12),
          caption='Sea Spirit anchored with the Gorge as a backdrop.',
          photographer='Tom Davis'),
    Photo('cruising-3', _UNSPLASH.format('photo-1505118380757-91f5f5632de0'),
          1200, 800, 'Sunset sailing', 'Sunset Cruise Rally',
          PhotoAlbum.CRUISING, date(2024, 3, 8),
          caption='Perfect conditions for our monthly sunset cruise.'),
    Photo('cruising-4', _UNSPLASH.format('photo-1519046904884-53103b34b206'),
          1200, 900, 'Beach and boats', 'Summer Rendezvous',
          PhotoAlbum.CRUISING, date(2023, 7, 22),
          caption='Club boats anchor near the beach during our annual '
                  'rendezvous.'),
    Photo('cruising-5', _UNSPLASH.format('photo-1469571486292-0ba58a3f068b'),
          1600, 1200, 'Fleet of boats cruising together',
          'Weekend Cruise to Ilwaco', PhotoAlbum.CRUISING, date(2023, 6, 15),
          caption='The cruising fleet makes its way down the Columbia.'),
    Photo('social-1', _UNSPLASH.format('photo-1511795409834-ef04bbd61622'),
          1200, 800, 'People gathering at outdoor party',
          'Summer Solstice Party', PhotoAlbum.SOCIAL, date(2023, 6, 21),
          caption='Members celebrate the longest day with food and friends.'),
    Photo('social-2', _UNSPLASH.format('photo-1414235077428-338989a2e8c0'),
          1200, 800, 'Dinner table setting', "Captain's Dinner 2023",
          PhotoAlbum.SOCIAL, date(2023, 11, 4),
          caption='Annual awards dinner honoring our racing skippers.',
          photographer='Club Photographer'),
    Photo('social-3', _UNSPLASH.format('photo-1517457373958-b7bdd4587205'),
          1200, 1600, 'BBQ and outdoor dining', 'New Member BBQ',
          PhotoAlbum.SOCIAL, date(2024, 4, 14),
          caption='Welcoming our newest members with burgers and sailing '
                  'stories.'),
    Photo('social-4', _UNSPLASH.format('photo-1530103862676-de8c9debad1d'),
          1200, 800, 'Group celebration', 'Opening Day 2024',
          PhotoAlbum.SOCIAL, date(2024, 5, 1),
          caption='Club members gather for the traditional Opening Day '
                  'ceremony.'),
    Photo('clubhouse-1', _UNSPLASH.format('photo-1545558014-8692077e9b5c'),
          1200, 800, 'Marina and dock at sunset', 'AYC Dock at Sunset',
          PhotoAlbum.CLUBHOUSE, date(2023, 8, 15),
          caption='Our home on the beautiful Columbia River.'),
    Photo('clubhouse-2', _UNSPLASH.format('photo-1567899378494-47b22a2ae96a'),
          1200, 900, 'Boats in marina', 'Morning at the Marina',
          PhotoAlbum.CLUBHOUSE, date(2024, 2, 20),
          caption='A peaceful morning at the AYC dock.'),
    Photo('clubhouse-3', _UNSPLASH.format('photo-1505142468610-359e7d316be0'),
          1600, 1200, 'Dock and boats', 'Club Fleet',
          PhotoAlbum.CLUBHOUSE, date(2023, 6, 1),
          caption='Member boats ready for a day on the water.'),
    Photo('historical-1', _UNSPLASH.format('photo-1516912481808-3406841bd33c'),
          1200, 900, 'Vintage sailboat', 'Classic Wooden Yachts',
          PhotoAlbum.HISTORICAL, date(1955, 7, 15),
          caption="The club's early fleet of wooden sailboats, circa 1950s."),
    Photo('historical-2', _UNSPLASH.format('photo-1473116763249-2faaef81ccda'),
          1200, 800, 'Old sailing photograph', 'Founding Members Regatta',
          PhotoAlbum.HISTORICAL, date(1935, 8, 4),
          caption='One of the first club regattas after our founding in '
                  '1931.'),
    Photo('historical-3', _UNSPLASH.format('photo-1498623116890-37e912163d5d'),
          1200, 1200, 'Historic marina', 'Original Clubhouse',
          PhotoAlbum.HISTORICAL, date(1940, 4, 10),
          caption='The first AYC clubhouse on the Astoria waterfront.'),
    Photo('historical-4', _UNSPLASH.format('photo-1471958680802-1345a694ba6d'),
          1200, 800, 'Vintage regatta', '1960s Racing',
          PhotoAlbum.HISTORICAL, date(1965, 9, 12),
          caption='Competitive racing has always been a cornerstone of AYC.'),
)


def club_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the display timezone, defaulting to the club's own."""
    return ZoneInfo(name or CLUB_TIMEZONE)


def build_events(today: date, tz: tzinfo) -> List[Event]:
    """
    Build the built-in event schedule around a given day.

    Args:
        today: Day the day offsets are counted from
        tz: Timezone the wall-clock times are expressed in

    Returns:
        List of Event objects in manifest order
    """
    def at(offset: int, hh_mm) -> datetime:
        hour, minute = hh_mm
        return datetime.combine(
            today + timedelta(days=offset), time(hour, minute), tzinfo=tz
        )

    events = []
    for (event_id, title, start_offset, start_at, end_offset, end_at,
         category, description, location, extra) in _EVENT_MANIFEST:
        events.append(Event(
            event_id=event_id,
            title=title,
            start=at(start_offset, start_at),
            end=at(end_offset, end_at),
            category=category,
            description=description,
            location=location,
            **extra
        ))
    return events


def build_default_store(today: date, tz: tzinfo) -> RecordStore:
    """Return the built-in record store with events scheduled around today."""
    return RecordStore(events=tuple(build_events(today, tz)), photos=PHOTOS)
