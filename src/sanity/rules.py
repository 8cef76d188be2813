"""Rule catalog for sanity.

The fixed vocabulary of rule names a field can declare, and the failure
kinds those rules produce when violated.
"""

from enum import Enum

# Metadata key holding the comma-separated list of active rule names
LABEL = "sanity"


class RuleName(str, Enum):
    """Rule names recognised in field metadata."""
    NOT_NULL = "notnull"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    REGEX = "regex"
    MAX_LEN = "maxlen"
    MIN_LEN = "minlen"


class FailureKind(str, Enum):
    """Kinds of validation failure recorded against a field path."""
    NOT_NULL = "not_null"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    REGEX = "regex_mismatch"
    MAX_LEN = "max_length_exceeded"
    MIN_LEN = "min_length_violated"
    INVALID_RULE = "invalid_rule"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    def __str__(self) -> str:
        return self.message


_MESSAGES = {
    FailureKind.NOT_NULL: "blank value sent to field marked as notnull",
    FailureKind.GREATER_THAN: "value does not satisfy greater than condition",
    FailureKind.LESS_THAN: "value does not satisfy less than condition",
    FailureKind.REGEX: "does not match pattern",
    FailureKind.MAX_LEN: "exceeds maximum length",
    FailureKind.MIN_LEN: "len is smaller than minimum length",
    FailureKind.INVALID_RULE: "rule parameter could not be parsed",
}

_FAILURES = {
    RuleName.NOT_NULL: FailureKind.NOT_NULL,
    RuleName.GREATER_THAN: FailureKind.GREATER_THAN,
    RuleName.LESS_THAN: FailureKind.LESS_THAN,
    RuleName.REGEX: FailureKind.REGEX,
    RuleName.MAX_LEN: FailureKind.MAX_LEN,
    RuleName.MIN_LEN: FailureKind.MIN_LEN,
}

_RULE_VALUES = frozenset(rule.value for rule in RuleName)


def failure_for(rule: RuleName | str) -> FailureKind:
    """Return the failure kind a rule produces on violation.

    Args:
        rule: Rule name, either a RuleName or its string value

    Returns:
        FailureKind recorded when the rule is violated

    Raises:
        ValueError: If the rule name is not part of the catalog
    """
    return _FAILURES[RuleName(rule)]


def is_known_rule(name: str) -> bool:
    """Check whether a rule name belongs to the catalog."""
    return name in _RULE_VALUES
