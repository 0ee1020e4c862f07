"""
Feed rewrite pipeline: fetch -> parse -> normalize -> filter -> inject -> render.
"""
import logging
from typing import Protocol

from .document import FeedDocument, parse_document
from .filters import filter_sites, strip_noise_fields
from .injector import inject_live_entry
from .normalizer import normalize_sites
from .rules import RuleSet, build_rule_set

logger = logging.getLogger("feed.pipeline")

FEED_URL_SETTING = "JSON_URL"


class Origin(Protocol):
    """Anything that can fetch raw bytes from an origin URL."""

    def fetch(self, url: str, setting_name: str = ...) -> bytes:
        ...


class FeedPipeline:
    """
    Rewrites the origin channel feed for one request.

    Usage:
        pipeline = FeedPipeline.from_settings(settings)
        body = pipeline.run(origin_client, host="tv.example.com")
    """

    def __init__(
        self,
        feed_url: str,
        rules: RuleSet,
        strip_noise: bool = False,
    ):
        self.feed_url = feed_url
        self.rules = rules
        self.strip_noise = strip_noise

    @classmethod
    def from_settings(cls, settings) -> "FeedPipeline":
        """Build a pipeline with the rules currently configured."""
        return cls(
            feed_url=settings.json_url,
            rules=build_rule_set(settings.maps, settings.removes),
            strip_noise=settings.strip_noise_fields,
        )

    def transform(self, document: FeedDocument, host: str) -> FeedDocument:
        """Apply the rewrite steps to a parsed document in place."""
        sites = document.site_list()
        if sites is not None:
            renamed = normalize_sites(sites, self.rules.rename)
            document.replace_sites(filter_sites(sites, self.rules.remove))
            logger.debug(f"Normalized {renamed} of {len(sites)} site names")
        else:
            logger.info("Feed has no sites list, passing it through")

        if self.strip_noise:
            strip_noise_fields(document)

        inject_live_entry(document, host)
        return document

    def run(self, origin: Origin, host: str) -> bytes:
        """
        Fetch the origin feed and return the rewritten JSON body.

        Raises:
            ConfigurationError: feed URL not configured
            UpstreamError: origin fetch failed
            MalformedDocumentError: origin feed could not be parsed
        """
        raw = origin.fetch(self.feed_url, setting_name=FEED_URL_SETTING)
        document = parse_document(raw)
        return self.transform(document, host).render()
