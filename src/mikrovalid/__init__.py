"""
MikroValid - Lightweight validator for nested JSON-shaped data.

Provides:
- Declarative schema validation with exhaustive error reporting
- Schema inference from sample values
- JSON/YAML schema document loading

Example:
    >>> from mikrovalid import MikroValid
    >>> validator = MikroValid(silent=True)
    >>> report = validator.test(
    ...     {"properties": {"phone": {"type": "number", "minValue": 1000}}},
    ...     {"phone": 999},
    ... )
    >>> report.success
    False
    >>> report.errors[0].to_dict()
    {'key': 'phone', 'value': 999, 'success': False, 'error': 'Value too small'}
"""

from .core import MikroValid, ValidatorConfig, schema_from, test
from .errors import (
    DocumentError,
    ErrorKind,
    InvalidInputError,
    MikroValidError,
    MissingInputError,
    RecursionLimitError,
    Result,
    SchemaDefinitionError,
    ValidationReport,
)
from .schema import ObjectSchema, PropertySchema, parse_schema

__all__ = [
    "MikroValid",
    "ValidatorConfig",
    "test",
    "schema_from",
    "parse_schema",
    "PropertySchema",
    "ObjectSchema",
    "Result",
    "ValidationReport",
    "ErrorKind",
    "MikroValidError",
    "MissingInputError",
    "InvalidInputError",
    "SchemaDefinitionError",
    "RecursionLimitError",
    "DocumentError",
    "__version__",
]

__version__ = "1.0.0"
