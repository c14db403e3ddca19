"""Splices generated declarations into an existing source file."""

from __future__ import annotations

import re

from ..shared import DEFAULT_ANCHOR, DEFAULT_BANNER, MergeError


def find_anchor(source: str, anchor: str) -> int:
    """Return the offset of the first line starting with ``anchor``, or -1."""
    match = re.search(rf"^{re.escape(anchor)}", source, flags=re.MULTILINE)
    return match.start() if match else -1


def merge_generated(
    source: str,
    document: str,
    *,
    anchor: str = DEFAULT_ANCHOR,
    banner: str = DEFAULT_BANNER,
    path: str | None = None,
) -> str:
    """Replace everything after the anchor line with the generated document.

    The text before the anchor is kept byte for byte. The anchor is written
    back followed by a blank line, the banner, another blank line and the
    document. Merging the same document twice yields the same text.

    Raises:
        MergeError: If no line starts with ``anchor``.
    """
    start = find_anchor(source, anchor)
    if start < 0:
        raise MergeError(anchor, path)

    return f"{source[:start]}{anchor}\n\n{banner}\n\n{document}"
