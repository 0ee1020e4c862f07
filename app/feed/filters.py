"""
Site removal rules and the noise-field stripper.
"""
import logging
from typing import AbstractSet, Any, List

from .document import FeedDocument, entry_name

logger = logging.getLogger("feed.filters")

NOISE_FIELDS = ("wallpaper", "ads")


def is_retained(entry: Any, remove: AbstractSet[str]) -> bool:
    """Entries without a string name are always kept."""
    name = entry_name(entry)
    if name is None:
        return True
    return not any(token in name for token in remove)


def filter_sites(sites: List[Any], remove: AbstractSet[str]) -> List[Any]:
    """Return the sites that match none of the removal tokens, in order."""
    if not remove:
        return list(sites)
    kept = [site for site in sites if is_retained(site, remove)]
    dropped = len(sites) - len(kept)
    if dropped:
        logger.info(f"Removed {dropped} of {len(sites)} sites by removal rules")
    return kept


def strip_noise_fields(document: FeedDocument) -> None:
    removed = document.discard_fields(*NOISE_FIELDS)
    if removed:
        logger.debug(f"Stripped noise fields: {removed}")
