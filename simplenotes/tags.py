"""Tag line codec for the ``// +tag`` first-line convention."""

from __future__ import annotations

import re

TAG_LINE_MARKER = "//"
TAG_PREFIX = "+"

_TAG_RE = re.compile(r"\+(\w+)")


def decode_tags(line: str) -> tuple[str, ...]:
    """Extract tags from a note's first line in order of appearance.

    Rules:
    - Only a line starting with ``//`` is a tag line; anything else has no tags.
    - Each ``+`` followed by one or more word characters yields one tag.
    - Tags are kept verbatim; duplicates are preserved.

    A line such as ``// see http://x+y`` is still scanned; there is no escape
    for comment lines that are not meant to carry tags.
    """

    if not line or not line.startswith(TAG_LINE_MARKER):
        return ()
    return tuple(match.group(1) for match in _TAG_RE.finditer(line))


def encode_tags(phrase: str) -> str | None:
    """Render a whitespace-separated tag phrase as a tag line.

    Words already starting with ``+`` are not prefixed again. Returns ``None``
    for an empty or blank phrase so the caller can omit the line entirely.
    """

    words = (phrase or "").split()
    if not words:
        return None
    marked = [
        word if word.startswith(TAG_PREFIX) else TAG_PREFIX + word for word in words
    ]
    return f"{TAG_LINE_MARKER} {' '.join(marked)}"
