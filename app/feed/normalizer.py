"""
Channel name cleanup and rename rules.

Names go through three steps in order: leading decoration is stripped, the
text before the first "┃" is dropped, then the first matching rename rule
replaces the whole name.
"""
import logging
import re
from typing import Any, Dict, List

from .document import entry_name

logger = logging.getLogger("feed.normalizer")

NAME_DELIMITER = "┃"

# Anything other than ASCII alphanumerics, CJK ideographs, whitespace and . - _ ( ) [ ] { } |
LEADING_NOISE = re.compile(r"^[^a-zA-Z0-9\u4e00-\u9fff\s.\-_()\[\]{}|]+")


def strip_leading_noise(name: str) -> str:
    """Remove leading emoji, bullets and similar decoration, then trim."""
    return LEADING_NOISE.sub("", name).strip()


def truncate_at_delimiter(name: str) -> str:
    """Keep the text after the first delimiter, if there is one."""
    if NAME_DELIMITER not in name:
        return name
    tail = name.split(NAME_DELIMITER, 1)[1]
    return tail or name


def apply_rename(name: str, rename: Dict[str, str]) -> str:
    """Replace the name with the value of the first key found inside it."""
    for key, value in rename.items():
        if key in name:
            logger.debug(f"name: {name} matched rename key: {key}")
            return value
    return name


def normalize_name(name: str, rename: Dict[str, str]) -> str:
    name = strip_leading_noise(name)
    name = truncate_at_delimiter(name)
    return apply_rename(name, rename)


def normalize_sites(sites: List[Any], rename: Dict[str, str]) -> int:
    """
    Normalize every site name in place.

    Entries that are not mappings or whose name is not a string are left
    untouched.

    Returns:
        Number of entries whose name changed
    """
    changed = 0
    for site in sites:
        name = entry_name(site)
        if name is None:
            continue
        cleaned = normalize_name(name, rename)
        if cleaned != name:
            site["name"] = cleaned
            changed += 1
    return changed
