"""Traversal and rule engine for sanity.

Walks an object graph depth-first, resolves the rule instructions of every
field from its schema and records failures keyed by dotted path. Each step
returns its own partial SanityInfo, merged by the caller.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable

from .config import LengthUnit, SanityConfig, create_default_config
from .rules import FailureKind, RuleName
from .schema import FieldRules, RecordSchema, schema_for
from .shapes import ValueKind, classify

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")

Path = tuple[str, ...]


@dataclass
class SanityInfo:
    """Failures found by one check call.

    ``errors`` holds at most one failure per path: when several rules fail on
    the same field the last one evaluated wins. ``all_errors`` keeps every
    failure per path in evaluation order.
    """
    errors: dict[str, FailureKind] = field(default_factory=dict)
    all_errors: dict[str, list[FailureKind]] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def record(self, path: str, kind: FailureKind) -> None:
        """Record a failure at a path."""
        self.all_errors.setdefault(path, []).append(kind)
        self.errors[path] = kind

    def merge(self, other: "SanityInfo") -> None:
        """Merge a partial result into this one, preserving evaluation order."""
        for path, kinds in other.all_errors.items():
            for kind in kinds:
                self.record(path, kind)

    def messages(self) -> dict[str, str]:
        """Failure messages keyed by path."""
        return {path: kind.message for path, kind in self.errors.items()}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "errors": {path: kind.value for path, kind in self.errors.items()},
            "messages": self.messages(),
            "all_errors": {
                path: [kind.value for kind in kinds]
                for path, kinds in self.all_errors.items()
            },
        }


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


class Validator:
    """Validates objects against the rules declared on their fields."""

    def __init__(self, config: SanityConfig | None = None):
        self.config = config or create_default_config()
        self._evaluators: dict[ValueKind, Callable[[Any, dict[str, str]], list[FailureKind]]] = {
            ValueKind.STRING: self._check_string,
            ValueKind.BOOL: self._check_bool,
            ValueKind.INT: self._check_int,
        }

    def check(self, obj: Any, schema: RecordSchema | Mapping | None = None) -> tuple[SanityInfo, bool]:
        """Validate an object.

        Args:
            obj: Record to validate (dataclass, pydantic model, or any object
                or mapping described by ``schema``)
            schema: Explicit schema; resolved from the object's field
                metadata when omitted

        Returns:
            Tuple of the collected failures and the validity flag
        """
        if isinstance(schema, Mapping):
            schema = RecordSchema.from_mapping(schema)

        info = SanityInfo()
        if obj is None:
            logger.debug("Nothing to validate: object is None")
        else:
            if schema is None:
                schema = schema_for(obj)
            if schema is None:
                logger.debug(f"No rule schema for {type(obj).__name__}, nothing to validate")
            else:
                info = self._walk_record(obj, schema, (), frozenset())

        logger.debug(f"Validation finished with {len(info.errors)} failures")
        return info, info.valid

    def _walk_record(self, obj: Any, schema: RecordSchema, path: Path, active: frozenset[int]) -> SanityInfo:
        result = SanityInfo()
        where = ".".join(path) or "<root>"

        if id(obj) in active:
            logger.warning(f"Cycle detected at {where}, not descending")
            return result
        if len(active) >= self.config.max_depth:
            logger.warning(f"Maximum depth {self.config.max_depth} reached at {where}, not descending")
            return result
        active = active | {id(obj)}

        for field_rules in schema.fields:
            field_path = (*path, field_rules.display_name)

            if not field_rules.annotated:
                if self.config.skip_unannotated:
                    logger.debug(f"Skipping unannotated field {'.'.join(field_path)}")
                    continue
                logger.warning(
                    f"Field {'.'.join(field_path)} declares no rules, "
                    f"remaining fields of {where} are not validated"
                )
                break

            value = _lookup(obj, field_rules.attr)
            result.merge(self._check_field(value, field_rules, field_path, active))

        return result

    def _check_field(self, value: Any, field_rules: FieldRules, path: Path, active: frozenset[int]) -> SanityInfo:
        result = SanityInfo()
        joined = ".".join(path)
        instructions = field_rules.instructions()

        if value is None:
            if _wants_not_null(instructions):
                result.record(joined, FailureKind.NOT_NULL)
            return result

        child = field_rules.nested if field_rules.nested is not None else schema_for(value)
        kind = classify(value, has_schema=child is not None, declared=field_rules.kind)
        logger.debug(f"Field {joined} resolved as {kind.value}")

        if kind == ValueKind.RECORD:
            return self._walk_record(value, child, path, active)
        if kind == ValueKind.SEQUENCE:
            return self._walk_sequence(value, field_rules, instructions, path, active)

        evaluator = self._evaluators.get(kind)
        if evaluator is None:
            return result

        for failure in evaluator(value, instructions):
            result.record(joined, failure)
        return result

    def _walk_sequence(self, items: Sequence, field_rules: FieldRules, instructions: dict[str, str],
                       path: Path, active: frozenset[int]) -> SanityInfo:
        result = SanityInfo()

        if _wants_not_null(instructions) and len(items) == 0:
            result.record(".".join(path), FailureKind.NOT_NULL)

        for index, item in enumerate(items):
            if item is None:
                continue
            child = field_rules.nested if field_rules.nested is not None else schema_for(item)
            if child is None or classify(item, has_schema=True) != ValueKind.RECORD:
                continue
            result.merge(self._walk_record(item, child, (*path, str(index)), active))

        return result

    # Evaluators return failures in evaluation order; the last one wins in
    # the failure map.

    def _check_string(self, value: str, instructions: dict[str, str]) -> list[FailureKind]:
        failures = self._check_not_null(value, instructions)

        pattern = instructions.get(RuleName.REGEX.value)
        if pattern is not None:
            try:
                if not _compile(pattern).search(value):
                    failures.append(FailureKind.REGEX)
            except re.error as e:
                logger.warning(f"Invalid regex pattern '{pattern}': {e}")
                if self.config.report_invalid_rules:
                    failures.append(FailureKind.INVALID_RULE)

        if RuleName.MAX_LEN.value in instructions:
            limit = self._parse_int(RuleName.MAX_LEN, instructions[RuleName.MAX_LEN.value], failures)
            if limit is not None and self._length(value) > limit:
                failures.append(FailureKind.MAX_LEN)

        if RuleName.MIN_LEN.value in instructions:
            limit = self._parse_int(RuleName.MIN_LEN, instructions[RuleName.MIN_LEN.value], failures)
            if limit is not None and self._length(value) < limit:
                failures.append(FailureKind.MIN_LEN)

        return failures

    def _check_bool(self, value: bool, instructions: dict[str, str]) -> list[FailureKind]:
        return self._check_not_null(value, instructions)

    def _check_int(self, value: int, instructions: dict[str, str]) -> list[FailureKind]:
        failures = self._check_not_null(value, instructions)

        if RuleName.GREATER_THAN.value in instructions:
            threshold = self._parse_int(RuleName.GREATER_THAN, instructions[RuleName.GREATER_THAN.value], failures)
            if threshold is not None and value < threshold:
                failures.append(FailureKind.GREATER_THAN)

        if RuleName.LESS_THAN.value in instructions:
            threshold = self._parse_int(RuleName.LESS_THAN, instructions[RuleName.LESS_THAN.value], failures)
            if threshold is not None and value > threshold:
                failures.append(FailureKind.LESS_THAN)

        return failures

    def _check_not_null(self, value: Any, instructions: dict[str, str]) -> list[FailureKind]:
        if _wants_not_null(instructions) and not value:
            return [FailureKind.NOT_NULL]
        return []

    def _parse_int(self, rule: RuleName, raw: str, failures: list[FailureKind]) -> int | None:
        """Parse an integer rule parameter; malformed values disable the rule."""
        if _INTEGER.fullmatch(raw):
            return int(raw)

        logger.warning(f"Ignoring rule '{rule.value}': parameter '{raw}' is not an integer")
        if self.config.report_invalid_rules:
            failures.append(FailureKind.INVALID_RULE)
        return None

    def _length(self, value: str) -> int:
        if self.config.length_unit == LengthUnit.CHARS:
            return len(value)
        return len(value.encode("utf-8"))


def check(obj: Any, schema: RecordSchema | Mapping | None = None,
          config: SanityConfig | None = None) -> tuple[SanityInfo, bool]:
    """Validate an object with a one-off Validator.

    Returns:
        Tuple of the collected failures and the validity flag
    """
    return Validator(config).check(obj, schema)


def _wants_not_null(instructions: dict[str, str]) -> bool:
    return instructions.get(RuleName.NOT_NULL.value) == "true"


def _lookup(obj: Any, attr: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(attr)
    return getattr(obj, attr, None)
