"""
Channel feed rewriting: rule parsing, name normalization, filtering and
live entry injection.
"""
from .document import FeedDocument, entry_name, parse_document
from .filters import NOISE_FIELDS, filter_sites, is_retained, strip_noise_fields
from .injector import build_live_entry, inject_live_entry
from .normalizer import (
    apply_rename,
    normalize_name,
    normalize_sites,
    strip_leading_noise,
    truncate_at_delimiter,
)
from .pipeline import FeedPipeline
from .rules import RuleSet, build_rule_set, parse_removal_rules, parse_rename_rules

__all__ = [
    # Document
    "FeedDocument",
    "entry_name",
    "parse_document",
    # Rules
    "RuleSet",
    "build_rule_set",
    "parse_rename_rules",
    "parse_removal_rules",
    # Steps
    "strip_leading_noise",
    "truncate_at_delimiter",
    "apply_rename",
    "normalize_name",
    "normalize_sites",
    "is_retained",
    "filter_sites",
    "NOISE_FIELDS",
    "strip_noise_fields",
    "build_live_entry",
    "inject_live_entry",
    # Pipeline
    "FeedPipeline",
]
