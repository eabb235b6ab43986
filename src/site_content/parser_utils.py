"""Parsing utilities shared by the content sources."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Sequence, Union

from bs4 import BeautifulSoup
from dateutil import parser as date_parser

WHITESPACE_PATTERN = re.compile(r"\s+")
MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\([^)]*\)")
MARKDOWN_NOISE_PATTERN = re.compile(r"(#{1,6}\s+|[*_`>]+)")
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]*\)")
MDX_STATEMENT_PATTERN = re.compile(r"^(import|export)\s.*$", re.MULTILINE)

# Fills fields a partial date leaves out ("2024-03" is 2024-03-01).
PARTIAL_DATE_DEFAULT = datetime(1970, 1, 1)


def parse_date(value: Optional[Union[str, date, datetime]]) -> Optional[datetime]:
    """Parse a frontmatter or API date into an aware UTC datetime.

    Returns None for missing or unparsable values.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = date_parser.parse(str(value), default=PARTIAL_DATE_DEFAULT)
        except (ValueError, OverflowError):
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def html_to_text(markup: Optional[str]) -> str:
    """Reduce HTML/JSX markup to collapsed plain text."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = soup.get_text(" ")
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def make_excerpt(body: Optional[str], length: int = 150) -> str:
    """Build a plain-text excerpt from an MDX/Markdown body."""
    if not body:
        return ""
    text = MDX_STATEMENT_PATTERN.sub("", body)
    text = MARKDOWN_IMAGE_PATTERN.sub("", text)
    text = MARKDOWN_LINK_PATTERN.sub(r"\1", text)
    text = html_to_text(text)
    text = MARKDOWN_NOISE_PATTERN.sub("", text).strip()
    if len(text) <= length:
        return text
    cut = text[:length].rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "..."


def ensure_list(value: Optional[Union[str, Sequence[Any]]]) -> List[Any]:
    """Ensure input is a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
