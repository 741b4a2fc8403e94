"""
Validator Facade for MikroValid.

MikroValid is a lightweight validator: provide a compact declarative schema
and your input, and get back a success flag plus every violation found.

Example:
    >>> from mikrovalid import MikroValid
    >>> validator = MikroValid()
    >>> schema = {
    ...     "properties": {
    ...         "personal": {
    ...             "type": "object",
    ...             "name": {"type": "string"},
    ...             "required": ["name"],
    ...         },
    ...         "work": {
    ...             "type": "object",
    ...             "office": {"type": "string"},
    ...             "salary": {"type": "number"},
    ...             "required": ["office"],
    ...         },
    ...         "required": ["personal", "work"],
    ...     }
    ... }
    >>> report = validator.test(
    ...     schema,
    ...     {"personal": {"name": "Sam Person"}, "work": {"office": "London", "salary": 10000}},
    ... )
    >>> report.success
    True
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from . import engine
from .errors import InvalidInputError, MissingInputError, ValidationReport
from .inference import schema_from as _schema_from
from .schema import ObjectSchema, parse_schema

logger = logging.getLogger("mikrovalid")

Sink = Callable[[str], None]

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ValidatorConfig:
    """
    Immutable validator configuration.

    Attributes:
        silent: Suppress diagnostics (results and errors are unaffected)
        max_depth: Deepest nesting level walked before RecursionLimitError
    """

    silent: bool = False
    max_depth: int = engine.DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ValidatorConfig":
        """Read MIKROVALID_SILENT and MIKROVALID_MAX_DEPTH from the environment."""
        env = os.environ if environ is None else environ
        silent = env.get("MIKROVALID_SILENT", "").strip().lower() in _TRUTHY
        max_depth = env.get("MIKROVALID_MAX_DEPTH")
        if max_depth:
            try:
                return cls(silent=silent, max_depth=int(max_depth))
            except ValueError as e:
                raise ValueError(f"Invalid MIKROVALID_MAX_DEPTH {max_depth!r}: {e}") from e
        return cls(silent=silent)


class MikroValid:
    """
    Schema-driven validator for nested JSON-shaped data.

    Args:
        silent: Suppress diagnostics about unchecked properties and skipped inference
        max_depth: Deepest nesting level to walk
        sink: Callable receiving diagnostic messages (defaults to a logging WARNING)
        config: Full configuration; overrides ``silent`` and ``max_depth`` when given
    """

    def __init__(
        self,
        silent: bool = False,
        *,
        max_depth: int = engine.DEFAULT_MAX_DEPTH,
        sink: Optional[Sink] = None,
        config: Optional[ValidatorConfig] = None,
    ):
        self._config = config or ValidatorConfig(silent=silent, max_depth=max_depth)
        self._sink = sink or logger.warning

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    @property
    def silent(self) -> bool:
        return self._config.silent

    def _diagnostics(self) -> Optional[Sink]:
        return None if self._config.silent else self._sink

    def compile(self, schema: Any) -> ObjectSchema:
        """Normalize a declarative schema once so it can be reused across calls."""
        return parse_schema(schema)

    def test(self, schema: Any, data: Any) -> ValidationReport:
        """
        Validate ``data`` against ``schema``.

        Args:
            schema: Declarative root schema or a compiled ObjectSchema
            data: Input mapping

        Returns:
            ValidationReport with the success flag and all errors

        Raises:
            MissingInputError: If data is None
            InvalidInputError: If data is not a mapping
            SchemaDefinitionError: If the schema is malformed
            RecursionLimitError: If the input nests too deep or is cyclic
        """
        if data is None:
            raise MissingInputError()
        if not isinstance(data, dict):
            raise InvalidInputError(f"Input must be a mapping, got {type(data).__name__}")

        root = parse_schema(schema)
        walked = engine.validate(
            root,
            data,
            max_depth=self._config.max_depth,
            sink=self._diagnostics(),
        )
        results, errors = walked["results"], walked["errors"]

        return ValidationReport(
            success=engine.is_successful(results, errors),
            errors=engine.compile_errors(results, errors),
        )

    def schema_from(self, sample: Any) -> Dict[str, Any]:
        """Infer a conservative declarative schema from a sample mapping."""
        return _schema_from(
            sample, sink=self._diagnostics(), max_depth=self._config.max_depth
        )


_default = MikroValid()


def test(schema: Any, data: Any) -> ValidationReport:
    """Validate with a default (non-silent) validator."""
    return _default.test(schema, data)


# Not a pytest test function
test.__test__ = False  # type: ignore[attr-defined]


def schema_from(sample: Any) -> Dict[str, Any]:
    """Infer a schema with a default (non-silent) validator."""
    return _default.schema_from(sample)
