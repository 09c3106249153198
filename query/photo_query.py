"""Album filtering, search and ordering for gallery photos."""
from typing import AbstractSet, Iterable, List

from records.models import Photo, PhotoAlbum, PhotoQuery, RecordStore, SortOrder


def filter_photos_by_album(
    photos: Iterable[Photo],
    albums: AbstractSet[PhotoAlbum]
) -> List[Photo]:
    """
    Keep photos whose album is in the given set.

    An empty set means no filter and returns every photo.
    """
    if not albums:
        return list(photos)
    return [photo for photo in photos if photo.album in albums]


def search_photos(photos: Iterable[Photo], query: str) -> List[Photo]:
    """
    Case-insensitive substring search over title, caption and alt text.

    Args:
        photos: Photos to search
        query: Search text; blank or whitespace-only means no filter

    Returns:
        New list of matching photos in input order
    """
    if not query.strip():
        return list(photos)
    needle = query.lower()
    return [
        photo for photo in photos
        if needle in photo.title.lower()
        or (photo.caption is not None and needle in photo.caption.lower())
        or needle in photo.alt.lower()
    ]


def sort_photos_by_date(
    photos: Iterable[Photo],
    order: SortOrder = SortOrder.DESC
) -> List[Photo]:
    """
    Return photos ordered by capture date, newest first by default.

    The input is never reordered; photos on the same date keep input order.
    """
    return sorted(
        photos,
        key=lambda photo: photo.captured_on,
        reverse=order == SortOrder.DESC
    )


def photos_in_album(store: RecordStore, album: PhotoAlbum) -> List[Photo]:
    """All photos of one album from the given store."""
    return [photo for photo in store.photos if photo.album == album]


def apply_photo_query(photos: Iterable[Photo], query: PhotoQuery) -> List[Photo]:
    """Album filter, then search, then sort, as the gallery page shows them."""
    filtered = filter_photos_by_album(photos, query.albums)
    filtered = search_photos(filtered, query.search)
    return sort_photos_by_date(filtered, query.order)
