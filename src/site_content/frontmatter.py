"""YAML frontmatter parsing for MDX/Markdown documents."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, Tuple

import yaml

from .exceptions import FrontmatterError

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def parse_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a document into its frontmatter mapping and body.

    A document without a leading ``---`` block has empty frontmatter and the
    whole text as its body.

    Raises:
        FrontmatterError: if the block is not valid YAML or not a mapping
    """
    text = text.lstrip("﻿")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Invalid YAML frontmatter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(f"Frontmatter must be a mapping, got {type(data).__name__}")

    body = text[match.end():]
    return {str(key): _normalize_value(value) for key, value in data.items()}, body


def _normalize_value(value: Any) -> Any:
    # YAML turns bare dates into date objects; keep frontmatter primitive.
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalize_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalize_value(item) for key, item in value.items()}
    return value
