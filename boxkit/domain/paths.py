from __future__ import annotations

import re
from urllib.parse import quote

from boxkit.errors import InvalidPathError

__all__ = [
    "url_path",
]

# A slash followed by dots ("/..", "/.") inside a segment means a relative path.
_RELATIVE_RE = re.compile(r"/\.+")

# Characters encodeURIComponent leaves alone; everything else gets escaped.
_SAFE = "-_.!~*'()"


def _trim_slashes(segment: str) -> str:
    """Remove one leading and one trailing slash from a segment."""
    if segment.startswith("/"):
        segment = segment[1:]
    if segment.endswith("/"):
        segment = segment[:-1]
    return segment


def url_path(*segments: object) -> str:
    """Build an API path from segments, in the order given.

    Rules:
    - Every segment is converted with str().
    - One leading/trailing slash is stripped so "/users" and "users" agree.
    - Each segment is percent-encoded as a whole, so an embedded "/" cannot
      reach another resource.
    - Segments are joined with "/" behind a leading "/".

    Raises:
        InvalidPathError: if a segment contains a relative path ("/..").
    """
    parts: list[str] = []
    for raw in segments:
        seg = _trim_slashes(str(raw))
        if _RELATIVE_RE.search(seg):
            raise InvalidPathError(
                f"An invalid path parameter exists in {seg}. "
                "Relative path parameters cannot be passed."
            )
        parts.append(quote(seg, safe=_SAFE))
    return "/" + "/".join(parts)
