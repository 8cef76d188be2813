"""Explicit rule schemas for records.

A RecordSchema lists the fields of a record in declaration order together
with their display name, active rule names and rule parameters. Schemas can
be built directly, parsed from plain dictionaries, or resolved from the field
metadata of dataclasses and pydantic models:

    @dataclass
    class Coupon:
        id: str = field(metadata={"name": "id", "sanity": "notnull,maxlen",
                                  "notnull": "true", "maxlen": "5"})

    class Coupon(BaseModel):
        id: str = Field(alias="id", json_schema_extra={"sanity": "notnull,maxlen",
                                                       "notnull": "true", "maxlen": "5"})
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import LABEL, RuleName, is_known_rule
from .shapes import ValueKind

logger = logging.getLogger(__name__)

NAME_KEY = "name"
KIND_KEY = "kind"


def parse_terms(terms: str) -> list[str]:
    """Split a comma-separated rule list, dropping blanks."""
    return [term.strip() for term in terms.split(",") if term.strip()]


class FieldRules(BaseModel):
    """Rules attached to a single field of a record."""
    attr: str
    name: str | None = None
    rules: list[str] | None = None
    params: dict[str, str] = Field(default_factory=dict)
    kind: ValueKind | None = None
    nested: "RecordSchema | None" = Field(default=None, alias="schema")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @field_validator("rules", mode="before")
    @classmethod
    def split_rule_string(cls, v):
        if isinstance(v, str):
            return parse_terms(v)
        return v

    @field_validator("params", mode="before")
    @classmethod
    def stringify_params(cls, v):
        if isinstance(v, Mapping):
            return {str(key): _param_text(value) for key, value in v.items()}
        return v

    @property
    def display_name(self) -> str:
        """External name used in failure paths."""
        return self.name or self.attr

    @property
    def annotated(self) -> bool:
        """Whether the field declares a rule vocabulary at all."""
        return self.rules is not None

    def instructions(self) -> dict[str, str]:
        """Resolve rule instructions from the declared rule names.

        Only names with a non-empty parameter become instructions; names
        outside the catalog are kept so callers can see them, but no
        evaluator acts on them.
        """
        resolved: dict[str, str] = {}
        for term in self.rules or []:
            value = self.params.get(term)
            if value:
                resolved[term] = value
        return resolved


class RecordSchema(BaseModel):
    """Ordered field rules of one record type."""
    fields: list[FieldRules] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def field(self, attr: str) -> FieldRules | None:
        """Look up the rules of a field by attribute name."""
        for field_rules in self.fields:
            if field_rules.attr == attr:
                return field_rules
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecordSchema":
        """Build a schema from ``{attr: {"name", "rules", "params", "kind", "nested"}}``.

        Mapping order is field order. The child schema is given under
        ``nested`` or its alias ``schema`` and may itself be a mapping in the
        same format. Unknown keys raise ValidationError.
        """
        fields = []
        for attr, spec in data.items():
            spec = dict(spec or {})
            nested = spec.pop("nested", None)
            alias = spec.pop("schema", None)
            if nested is None:
                nested = alias
            if isinstance(nested, Mapping):
                nested = cls.from_mapping(nested)
            fields.append(FieldRules(attr=attr, nested=nested, **spec))
        return cls(fields=fields)


FieldRules.model_rebuild()


def field_rules_from_metadata(attr: str, metadata: Mapping[str, Any], name: str | None = None) -> FieldRules:
    """Build FieldRules from a flat metadata mapping.

    Recognised keys: ``name`` (display name), ``sanity`` (comma-separated
    rule list), ``kind`` (value kind override) and one key per rule name
    carrying that rule's parameter. A missing ``sanity`` key means the field
    declares no rule vocabulary.
    """
    rules = None
    if LABEL in metadata:
        rules = parse_terms(str(metadata[LABEL] or ""))
        unknown = [term for term in rules if not is_known_rule(term)]
        if unknown:
            logger.debug(f"Field '{attr}' declares unknown rules: {', '.join(unknown)}")

    params = {
        rule.value: metadata[rule.value]
        for rule in RuleName
        if metadata.get(rule.value) is not None
    }

    return FieldRules(
        attr=attr,
        name=name or metadata.get(NAME_KEY) or None,
        rules=rules,
        params=params,
        kind=metadata.get(KIND_KEY),
    )


def schema_for(obj: Any) -> RecordSchema | None:
    """Resolve the rule schema of a dataclass or pydantic model.

    Args:
        obj: Instance or class

    Returns:
        RecordSchema built from field metadata, or None if the object is not
        a record type
    """
    cls = obj if isinstance(obj, type) else type(obj)

    if dataclasses.is_dataclass(cls):
        return _schema_from_dataclass(cls)
    if issubclass(cls, BaseModel):
        return _schema_from_model(cls)
    return None


def _schema_from_dataclass(cls: type) -> RecordSchema:
    return RecordSchema(fields=[
        field_rules_from_metadata(f.name, f.metadata)
        for f in dataclasses.fields(cls)
    ])


def _schema_from_model(cls: type[BaseModel]) -> RecordSchema:
    fields = []
    for attr, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else {}
        fields.append(field_rules_from_metadata(attr, extra, name=info.alias))
    return RecordSchema(fields=fields)


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
