"""Value shapes understood by the traversal engine.

Every field value resolves to exactly one ValueKind. The engine dispatches on
the kind instead of inspecting types again.
"""

from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Closed set of value shapes."""
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"            # Only reachable through an explicit kind override
    RECORD = "record"
    SEQUENCE = "sequence"
    UNSUPPORTED = "unsupported"


# Kinds that carry leaf rules
SCALAR_KINDS = frozenset({ValueKind.STRING, ValueKind.BOOL, ValueKind.INT})


def runtime_kind(value: Any, has_schema: bool = False) -> ValueKind:
    """Resolve the kind of a present (non-None) value from its runtime type.

    Args:
        value: Field value
        has_schema: Whether a record schema is available for the value

    Returns:
        ValueKind of the value
    """
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if has_schema:
        return ValueKind.RECORD
    return ValueKind.UNSUPPORTED


def classify(value: Any, has_schema: bool = False, declared: ValueKind | str | None = None) -> ValueKind:
    """Resolve the kind a field value is validated as.

    A declared kind overrides the runtime kind only where the two agree, with
    one exception: an int declared as ``uint`` is classified as UINT, which no
    evaluator handles. A declared kind that contradicts the runtime value makes
    the field unsupported.
    """
    kind = runtime_kind(value, has_schema)
    if declared is None:
        return kind

    declared = ValueKind(declared)
    if declared == kind:
        return kind
    if declared == ValueKind.UINT and kind == ValueKind.INT:
        return ValueKind.UINT
    return ValueKind.UNSUPPORTED
