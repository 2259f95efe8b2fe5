"""
Track key derivation.

The track key correlates now-playing metadata with stored votes. The browser
client computes it from the displayed artist/title; the server stores whatever
key it is given, so this function must stay byte-for-byte compatible with the
client's version.
"""

import re
from typing import Optional


SEPARATOR = "||"

# Anything other than lowercase ASCII letters, digits and the pipe character
_DISALLOWED = re.compile(r"[^a-z0-9|]")


def make_track_key(artist: Optional[str], title: Optional[str]) -> str:
    """Derive the track key for an artist/title pair.

    >>> make_track_key("The Beatles", "Hey Jude")
    'thebeatles||heyjude'
    >>> make_track_key("", "")
    '||'
    """
    raw = f"{artist or ''}{SEPARATOR}{title or ''}".lower()
    return _DISALLOWED.sub("", raw)


def split_track_key(track_key: str) -> tuple[str, str]:
    """Split a track key into its artist and title parts.

    Keys without a separator are treated as artist-only.
    """
    artist, _, title = track_key.partition(SEPARATOR)
    return artist, title
