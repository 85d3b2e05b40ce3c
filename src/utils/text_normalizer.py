"""Query normalization and classification for the lookup cache.

Two concerns live here:

1. **Cache-key normalization** -- ``normalize_query`` trims, lowercases and
   truncates a raw query so that trivially different inputs ("  Daft Punk ",
   "daft punk") share one cache entry.  The normalized string is also what
   gets sent to the resolver.

2. **Direct-identifier detection** -- ``is_direct_identifier`` recognises
   video links that can be fetched without a search step, and
   ``extract_video_id`` pulls the id out of such a link for the resolver.
"""

import re
from urllib.parse import parse_qs, urlparse

MAX_QUERY_LENGTH = 128

# Optional scheme, optional www./m., youtube.com or youtu.be-like short host,
# then a non-empty path.
_VIDEO_URL_RE = re.compile(r"^(https?://)?(www\.)?(m\.)?(youtube\.com|youtu\.?be)/.+$")

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{6,}$")

# Path prefixes on youtube.com that are followed directly by a video id.
_ID_PATH_PREFIXES = ("shorts", "embed", "v", "live")

_SHORT_HOSTS = ("youtu.be", "youtube")


def normalize_query(text: str, max_length: int = MAX_QUERY_LENGTH) -> str:
    """Return the canonical cache-key form of *text*.

    Strips surrounding whitespace, lowercases, and truncates to
    *max_length* characters.  Idempotent: normalizing an already
    normalized string returns it unchanged.

    Args:
        text: Raw user query (free text or URL).
        max_length: Maximum key length in characters.

    Returns:
        The normalized query.
    """
    # Truncation can expose trailing whitespace; strip it again so a second
    # pass is a no-op.
    return text.strip().lower()[:max_length].rstrip()


def is_direct_identifier(query: str) -> bool:
    """Return ``True`` if *query* looks like a video link rather than free text."""
    return _VIDEO_URL_RE.match(query) is not None


def extract_video_id(identifier: str) -> str | None:
    """Extract the video id from a watch/short/embed link.

    Accepts links with or without a scheme.  Returns ``None`` when no
    plausible id can be found (e.g. a channel or playlist page).
    """
    candidate = identifier.strip()
    if not re.match(r"^https?://", candidate):
        candidate = f"https://{candidate}"

    parsed = urlparse(candidate)
    host = (parsed.hostname or "").lower()
    segments = [s for s in parsed.path.split("/") if s]

    video_id: str | None = None
    # Short links: youtu.be/<id>, plus the dotless "youtube/<id>" form the
    # link pattern also accepts.
    if host.removeprefix("www.").removeprefix("m.") in _SHORT_HOSTS:
        video_id = segments[0] if segments else None
    elif segments and segments[0] == "watch":
        video_id = (parse_qs(parsed.query).get("v") or [None])[0]
    elif len(segments) >= 2 and segments[0] in _ID_PATH_PREFIXES:
        video_id = segments[1]

    if video_id and _VIDEO_ID_RE.match(video_id):
        return video_id
    return None
