"""
Tests: end-to-end feed rewriting
"""
import json

import pytest

from app.errors import ConfigurationError, MalformedDocumentError, UpstreamError
from app.feed.document import parse_document
from app.feed.pipeline import FeedPipeline
from app.feed.rules import RuleSet, build_rule_set
from config.settings import Settings

FEED_URL = "http://origin.test/feed.json"


def _pipeline(maps="", removes="", strip_noise=False):
    return FeedPipeline(FEED_URL, build_rule_set(maps, removes), strip_noise=strip_noise)


def test_end_to_end_without_rules(stub_origin):
    stub_origin.responses[FEED_URL] = '{"sites":[{"name":"★CCTV1┃高清"}],"lives":[]}'.encode("utf-8")
    body = _pipeline().run(stub_origin, "example.com")
    assert body == (
        '{"sites":[{"name":"高清"}],'
        '"lives":[{"name":"tvlive","type":0,"url":"https://example.com/live.txt","playerType":1}]}'
    ).encode("utf-8")


def test_rules_apply_to_cleaned_names(stub_origin):
    feed = {
        "spider": "./jar",
        "sites": [
            {"key": "1", "name": "🔴源A┃CCTV5"},
            {"key": "2", "name": "📺测试频道"},
            {"key": "3", "name": 42},
            {"key": "4", "name": "湖南卫视"},
        ],
        "lives": [{"name": "old"}],
    }
    stub_origin.responses[FEED_URL] = json.dumps(feed).encode("utf-8")

    body = _pipeline(maps="CCTV=CCTV-HD", removes="测试").run(stub_origin, "tv.example.com")
    data = json.loads(body)

    assert data["spider"] == "./jar"
    assert data["sites"] == [
        {"key": "1", "name": "CCTV-HD"},
        {"key": "3", "name": 42},
        {"key": "4", "name": "湖南卫视"},
    ]
    assert data["lives"] == [
        {"name": "tvlive", "type": 0, "url": "https://tv.example.com/live.txt", "playerType": 1}
    ]


def test_removal_matches_renamed_name_not_original():
    """Removal rules see the renamed name, so the original text no longer matches"""
    document = parse_document('{"sites": [{"name": "CCTV5"}]}')
    rules = RuleSet(rename={"CCTV": "央视"}, remove=frozenset({"CCTV"}))
    FeedPipeline(FEED_URL, rules).transform(document, "h")
    assert document.data["sites"] == [{"name": "央视"}]


def test_missing_sites_only_overwrites_lives():
    document = parse_document('{"spider": "x", "wallpaper": "w"}')
    _pipeline(removes="x").transform(document, "h")
    assert document.data == {
        "spider": "x",
        "wallpaper": "w",
        "lives": [{"name": "tvlive", "type": 0, "url": "https://h/live.txt", "playerType": 1}],
    }


def test_non_list_sites_passes_through():
    document = parse_document('{"sites": "broken"}')
    _pipeline(maps="b=c").transform(document, "h")
    assert document.data["sites"] == "broken"
    assert len(document.data["lives"]) == 1


def test_noise_fields_stripped_when_enabled():
    document = parse_document('{"sites": [], "wallpaper": "w", "ads": ["a"]}')
    _pipeline(strip_noise=True).transform(document, "h")
    assert "wallpaper" not in document.data
    assert "ads" not in document.data


def test_noise_fields_kept_by_default():
    document = parse_document('{"sites": [], "wallpaper": "w", "ads": ["a"]}')
    _pipeline().transform(document, "h")
    assert document.data["wallpaper"] == "w"
    assert document.data["ads"] == ["a"]


def test_from_settings_reads_rules():
    config = Settings(json_url=FEED_URL, maps="a=1", removes="x", strip_noise_fields=True)
    pipeline = FeedPipeline.from_settings(config)
    assert pipeline.feed_url == FEED_URL
    assert pipeline.rules.rename == {"a": "1"}
    assert pipeline.rules.remove == {"x"}
    assert pipeline.strip_noise is True


def test_missing_feed_url_is_configuration_error(stub_origin):
    pipeline = FeedPipeline("", RuleSet())
    with pytest.raises(ConfigurationError, match="JSON_URL"):
        pipeline.run(stub_origin, "h")
    assert stub_origin.fetches == []


def test_upstream_failure_propagates(stub_origin):
    with pytest.raises(UpstreamError):
        _pipeline().run(stub_origin, "h")


def test_malformed_feed_propagates(stub_origin):
    stub_origin.responses[FEED_URL] = b"<html>oops</html>"
    with pytest.raises(MalformedDocumentError):
        _pipeline().run(stub_origin, "h")
