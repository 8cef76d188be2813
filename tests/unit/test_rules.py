"""Tests for the rule catalog."""

import pytest

from sanity.rules import LABEL, FailureKind, RuleName, failure_for, is_known_rule


class TestRuleName:
    """Test rule vocabulary."""

    def test_rule_values(self):
        assert [rule.value for rule in RuleName] == ["notnull", "gt", "lt", "regex", "maxlen", "minlen"]

    def test_label(self):
        assert LABEL == "sanity"

    def test_is_known_rule(self):
        assert is_known_rule("maxlen")
        assert not is_known_rule("optional")
        assert not is_known_rule("")


class TestFailureFor:
    """Test rule to failure kind mapping."""

    @pytest.mark.parametrize("rule,expected", [
        ("notnull", FailureKind.NOT_NULL),
        ("gt", FailureKind.GREATER_THAN),
        ("lt", FailureKind.LESS_THAN),
        ("regex", FailureKind.REGEX),
        ("maxlen", FailureKind.MAX_LEN),
        ("minlen", FailureKind.MIN_LEN),
    ])
    def test_each_rule_has_a_failure(self, rule, expected):
        assert failure_for(rule) == expected
        assert failure_for(RuleName(rule)) == expected

    def test_unknown_rule_raises(self):
        with pytest.raises(ValueError):
            failure_for("between")


class TestFailureKind:
    """Test failure messages."""

    def test_messages(self):
        assert FailureKind.NOT_NULL.message == "blank value sent to field marked as notnull"
        assert FailureKind.MIN_LEN.message == "len is smaller than minimum length"

    def test_str_is_message(self):
        assert str(FailureKind.REGEX) == "does not match pattern"

    def test_every_kind_has_a_message(self):
        for kind in FailureKind:
            assert kind.message
