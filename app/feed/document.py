"""
Schema-light wrapper around the parsed channel feed.

The origin document is not validated. Accessors check types before use and
return None for anything that does not have the expected shape, so callers
skip malformed parts instead of failing the request.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Union

import json5

from app.errors import MalformedDocumentError

logger = logging.getLogger("feed.document")

SITES_FIELD = "sites"
LIVES_FIELD = "lives"


def entry_name(entry: Any) -> Optional[str]:
    """Return the entry's name if the entry is a mapping with a string name."""
    if isinstance(entry, dict):
        name = entry.get("name")
        if isinstance(name, str):
            return name
    return None


class FeedDocument:
    """A parsed feed: a top-level mapping with optional sites and lives."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    def site_list(self) -> Optional[List[Any]]:
        """The sites sequence, or None when it is missing or not a list."""
        sites = self.data.get(SITES_FIELD)
        if isinstance(sites, list):
            return sites
        return None

    def replace_sites(self, sites: List[Any]) -> None:
        self.data[SITES_FIELD] = sites

    def replace_lives(self, lives: List[Dict[str, Any]]) -> None:
        self.data[LIVES_FIELD] = lives

    def discard_fields(self, *names: str) -> List[str]:
        """Remove top-level fields if present. Returns the names removed."""
        removed = []
        for name in names:
            if name in self.data:
                del self.data[name]
                removed.append(name)
        return removed

    def render(self) -> bytes:
        """Serialize as compact UTF-8 JSON with non-ASCII text kept as-is."""
        return json.dumps(self.data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name} is not allowed")


def parse_document(raw: Union[bytes, str]) -> FeedDocument:
    """
    Parse feed text, tolerating comments and trailing commas.

    Raises:
        MalformedDocumentError: if the text is not parseable, contains
            NaN or Infinity, or the root value is not an object
    """
    if isinstance(raw, bytes):
        text = raw.decode("utf-8-sig", errors="replace")
    else:
        text = raw

    try:
        data = json5.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(f"Feed parse failed: {e}")
        raise MalformedDocumentError(f"Feed is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Feed root must be an object, got {type(data).__name__}"
        )
    return FeedDocument(data)
