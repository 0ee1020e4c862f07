"""
Tests: rename and removal rule parsing
"""
from app.feed.rules import build_rule_set, parse_removal_rules, parse_rename_rules


def test_rename_rules_keep_order():
    """Test that rename pairs are kept in configuration order"""
    rename = parse_rename_rules("a=1,b=2")
    assert rename == {"a": "1", "b": "2"}
    assert list(rename) == ["a", "b"]


def test_rename_rules_skip_malformed_tokens():
    """Test that empty tokens and tokens without '=' are ignored"""
    assert parse_rename_rules("a=1,,bad") == {"a": "1"}


def test_rename_rules_skip_empty_key():
    assert parse_rename_rules("=x, =y,c=3") == {"c": "3"}


def test_rename_rules_trim_both_sides():
    assert parse_rename_rules(" CCTV = CCTV-HD , 卫视=卫视高清") == {
        "CCTV": "CCTV-HD",
        "卫视": "卫视高清",
    }


def test_rename_rules_split_on_first_equals():
    assert parse_rename_rules("a=b=c") == {"a": "b=c"}


def test_rename_rules_allow_empty_value():
    assert parse_rename_rules("a=") == {"a": ""}


def test_rename_rules_empty_input():
    assert parse_rename_rules("") == {}
    assert parse_rename_rules(None) == {}


def test_removal_rules_are_trimmed():
    """Test that removal tokens are whitespace trimmed"""
    assert parse_removal_rules("X,Y, Z") == {"X", "Y", "Z"}


def test_removal_rules_drop_empty_tokens():
    assert parse_removal_rules("X,, ,Y,") == {"X", "Y"}


def test_removal_rules_empty_input():
    assert parse_removal_rules("") == frozenset()
    assert parse_removal_rules(None) == frozenset()


def test_build_rule_set():
    rules = build_rule_set("CCTV=CCTV-HD", "测试,广告")
    assert rules.rename == {"CCTV": "CCTV-HD"}
    assert rules.remove == {"测试", "广告"}
    assert not rules.is_empty


def test_build_rule_set_without_configuration():
    rules = build_rule_set(None, "")
    assert rules.rename == {}
    assert rules.remove == frozenset()
    assert rules.is_empty
