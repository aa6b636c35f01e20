"""Image reference rewriting for Markdown content.

References have the form ``![alt](path)``. They are located with a plain
left-to-right scan so the matching rules do not depend on a regex engine:

- the alt text runs up to the first ``]`` and may be empty
- ``]`` must be followed directly by ``(``
- the path runs up to the first ``)`` and must not be empty

Matches never overlap. A failed candidate resumes the scan one character
after its ``![``.
"""

import posixpath
from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

IMAGE_OPEN = "!["
ALT_CLOSE = "]"
PATH_OPEN = "("
PATH_CLOSE = ")"


@dataclass(frozen=True)
class ImageReference:
    """A single ``![alt](path)`` occurrence and its position in the text."""
    start: int
    end: int
    alt: str
    path: str

    @property
    def filename(self) -> str:
        """Final path segment of the referenced path."""
        return posixpath.basename(self.path.rstrip("/")) or self.path


def _match_at(text: str, start: int) -> Tuple[int, str, str]:
    """Try to match a reference whose ``![`` sits at ``start``.

    Returns:
        Tuple of (end, alt, path); end is -1 when there is no match
    """
    alt_start = start + len(IMAGE_OPEN)
    alt_end = text.find(ALT_CLOSE, alt_start)
    if alt_end == -1 or not text.startswith(PATH_OPEN, alt_end + 1):
        return -1, "", ""

    path_start = alt_end + 2
    path_end = text.find(PATH_CLOSE, path_start)
    if path_end == -1 or path_end == path_start:
        return -1, "", ""

    return path_end + 1, text[alt_start:alt_end], text[path_start:path_end]


def iter_image_references(text: str) -> Iterator[ImageReference]:
    """Yield every image reference in ``text`` from left to right."""
    pos = 0
    while True:
        start = text.find(IMAGE_OPEN, pos)
        if start == -1:
            return

        end, alt, path = _match_at(text, start)
        if end == -1:
            pos = start + 1
            continue

        yield ImageReference(start=start, end=end, alt=alt, path=path)
        pos = end


def rewrite_image_references(
    text: str,
    mapping: Dict[str, str],
    images_dir: str = "images",
) -> Tuple[str, int]:
    """Point image references at their renamed files.

    A reference whose file name is a key of ``mapping`` becomes
    ``![alt](<images_dir>/<mapped name>)``. Every other reference is left
    exactly as written.

    Args:
        text: Markdown content
        mapping: Original file name -> new file name
        images_dir: Directory prefix for rewritten paths

    Returns:
        Tuple of (rewritten text, number of references rewritten)
    """
    prefix = images_dir.rstrip("/")
    parts = []
    pos = 0
    count = 0

    for ref in iter_image_references(text):
        new_name = mapping.get(ref.filename)
        if new_name is None:
            continue

        new_path = f"{prefix}/{new_name}" if prefix else new_name
        parts.append(text[pos:ref.start])
        parts.append(f"![{ref.alt}]({new_path})")
        pos = ref.end
        count += 1

    parts.append(text[pos:])
    return "".join(parts), count
