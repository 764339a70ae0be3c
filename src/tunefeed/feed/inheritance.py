"""Resolution of the data a track actually renders with."""

from tunefeed.feed.models import Album, Override, Person, Track, ValueBlock


def effective_persons(track: Track, album: Album) -> list[Person]:
    """The track's own persons when it overrides, otherwise the album's."""
    if isinstance(track.persons, Override):
        return track.persons.data
    return album.persons


def effective_value(track: Track, album: Album) -> ValueBlock:
    """The track's own value block when it overrides, otherwise the album's."""
    if isinstance(track.value, Override):
        return track.value.data
    return album.value


def effective_artwork(track: Track, album: Album) -> str | None:
    """Track artwork, falling back to the album image."""
    return track.track_art_url or album.image_url


def episode_number(track: Track) -> int:
    """Explicit episode number if set, otherwise the track's position."""
    return track.episode if track.episode is not None else track.track_number
