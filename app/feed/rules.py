"""
Rename and removal rules parsed from the MAPS / REMOVES settings.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

logger = logging.getLogger("feed.rules")


@dataclass(frozen=True)
class RuleSet:
    """
    Channel rewrite rules.

    rename: substring -> replacement name, checked in insertion order
    remove: substrings whose presence drops a channel
    """
    rename: Dict[str, str] = field(default_factory=dict)
    remove: FrozenSet[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.rename and not self.remove


def parse_rename_rules(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse "k1=v1,k2=v2" into an ordered mapping.

    Tokens are split on the first "=" and both sides trimmed. Tokens without
    "=" or with an empty key are skipped.
    """
    rename: Dict[str, str] = {}
    if not raw:
        return rename

    for token in raw.split(","):
        key, sep, value = token.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        rename[key] = value.strip()
    return rename


def parse_removal_rules(raw: Optional[str]) -> FrozenSet[str]:
    """Parse "k1,k2" into a set of trimmed, non-empty tokens."""
    if not raw:
        return frozenset()
    return frozenset(token.strip() for token in raw.split(",") if token.strip())


def build_rule_set(maps_raw: Optional[str], removes_raw: Optional[str]) -> RuleSet:
    """Build a RuleSet from the raw configuration strings."""
    rules = RuleSet(
        rename=parse_rename_rules(maps_raw),
        remove=parse_removal_rules(removes_raw),
    )
    logger.debug(f"Parsed rename rules: {rules.rename}")
    logger.debug(f"Parsed removal rules: {sorted(rules.remove)}")
    return rules
