"""
Synthetic live entry pointing back at this service's /live.txt route.
"""
from typing import Any, Dict

from .document import FeedDocument

LIVE_ENTRY_NAME = "tvlive"
LIVE_LIST_PATH = "/live.txt"


def build_live_entry(host: str) -> Dict[str, Any]:
    return {
        "name": LIVE_ENTRY_NAME,
        "type": 0,
        "url": f"https://{host}{LIVE_LIST_PATH}",
        "playerType": 1,
    }


def inject_live_entry(document: FeedDocument, host: str) -> None:
    """Overwrite the document's lives with the single self-referencing entry."""
    document.replace_lives([build_live_entry(host)])
