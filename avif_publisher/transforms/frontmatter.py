"""Front matter preparation for Markdown posts."""

import datetime
from pathlib import Path
from typing import Optional

import yaml

FRONT_MATTER_DELIMITER = "---"
TITLE_HEADING_PREFIX = "# "
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def strip_title_heading(text: str) -> str:
    """Drop the first line when it is a level-1 heading.

    Only a first line starting with exactly ``"# "`` counts; ``"## sub"``
    and ``"#no-space"`` are kept.
    """
    if not text.startswith(TITLE_HEADING_PREFIX):
        return text

    newline = text.find("\n")
    if newline == -1:
        return ""
    return text[newline + 1:]


def title_from_filename(filename: str) -> str:
    """Base name of ``filename`` with its extension stripped."""
    return Path(filename).stem


def format_date(now: datetime.datetime) -> str:
    """Local date-time with second precision and no offset."""
    return now.strftime(DATE_FORMAT)


def _title_field(title: str) -> str:
    # Plain titles come out unchanged; anything YAML would misread gets quoted
    return yaml.safe_dump(
        {"title": title},
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    ).rstrip("\n")


def build_front_matter(title: str, now: Optional[datetime.datetime] = None) -> str:
    """Build the front matter block, including the trailing blank line.

    Args:
        title: Post title
        now: Timestamp for the date field (default: current local time)

    Returns:
        Front matter text ending in a blank line
    """
    if now is None:
        now = datetime.datetime.now()

    lines = [
        FRONT_MATTER_DELIMITER,
        _title_field(title),
        f"date: {format_date(now)}",
        "tags: [ ]",
        FRONT_MATTER_DELIMITER,
        "",
        "",
    ]
    return "\n".join(lines)


def prepare_document(text: str, filename: str, now: Optional[datetime.datetime] = None) -> str:
    """Strip a leading title heading and prepend front matter.

    Args:
        text: Raw document content
        filename: Document file name; its stem becomes the title
        now: Timestamp for the date field (default: current local time)

    Returns:
        Document content with front matter
    """
    header = build_front_matter(title_from_filename(filename), now)
    return header + strip_title_heading(text)
