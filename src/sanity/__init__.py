"""sanity - declarative field-level validation for Python objects.

Fields declare rules (notnull, gt, lt, regex, maxlen, minlen) in their
metadata; ``check`` walks the object graph and returns the failures keyed by
dotted field path.
"""

__version__ = "0.1.0"
__description__ = "Declarative field-level validation for Python objects"

from sanity.config import SanityConfig, load_config
from sanity.engine import SanityInfo, Validator, check
from sanity.rules import FailureKind, RuleName, failure_for
from sanity.schema import FieldRules, RecordSchema, schema_for

__all__ = [
    "__version__",
    "__description__",
    "check",
    "Validator",
    "SanityInfo",
    "SanityConfig",
    "load_config",
    "FailureKind",
    "RuleName",
    "failure_for",
    "FieldRules",
    "RecordSchema",
    "schema_for",
]
