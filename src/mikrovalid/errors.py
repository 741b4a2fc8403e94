"""
Result and Error Types for MikroValid.

Provides structured reporting for validation runs:
- ErrorKind: Enumerated violation categories, rendered to text at the boundary
- Result: Outcome of one leaf check or one structural (container) check
- ValidationReport: Aggregated success flag plus the ordered error list
- MikroValidError and subclasses: Fatal conditions that abort a call
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorKind(str, Enum):
    """Categories of reported (never raised) violations."""

    MISSING_REQUIRED_KEY = "missing_required_key"
    DISALLOWED_ADDITIONAL_PROPERTY = "disallowed_additional_property"
    INVALID_TYPE = "invalid_type"
    INVALID_FORMAT = "invalid_format"
    LENGTH_TOO_SHORT = "length_too_short"
    LENGTH_TOO_LONG = "length_too_long"
    VALUE_TOO_SMALL = "value_too_small"
    VALUE_TOO_LARGE = "value_too_large"
    PATTERN_MISMATCH = "pattern_mismatch"

    @property
    def is_structural(self) -> bool:
        return self in STRUCTURAL_KINDS


STRUCTURAL_KINDS = frozenset(
    {ErrorKind.MISSING_REQUIRED_KEY, ErrorKind.DISALLOWED_ADDITIONAL_PROPERTY}
)

# User-facing labels for field-level violations
FIELD_LABELS = {
    ErrorKind.INVALID_TYPE: "Invalid type",
    ErrorKind.INVALID_FORMAT: "Invalid format",
    ErrorKind.LENGTH_TOO_SHORT: "Length too short",
    ErrorKind.LENGTH_TOO_LONG: "Length too long",
    ErrorKind.VALUE_TOO_SMALL: "Value too small",
    ErrorKind.VALUE_TOO_LARGE: "Value too large",
    ErrorKind.PATTERN_MISMATCH: "Pattern does not match",
}


def render_error(kind: Optional[ErrorKind], names: Iterable[str] = ()) -> str:
    """
    Render an error kind to its user-facing message.

    Structural kinds list the offending property names comma-joined;
    field-level kinds map to a fixed label. ``None`` renders as "".

    Example:
        >>> render_error(ErrorKind.MISSING_REQUIRED_KEY, ["a", "b"])
        "Missing the required key: 'a, b'!"
    """
    if kind is None:
        return ""
    joined = ", ".join(str(name) for name in names)
    if kind is ErrorKind.MISSING_REQUIRED_KEY:
        return f"Missing the required key: '{joined}'!"
    if kind is ErrorKind.DISALLOWED_ADDITIONAL_PROPERTY:
        return f"Has additional disallowed properties: '{joined}'!"
    return FIELD_LABELS[kind]


class Result:
    """
    Outcome of a single check.

    Leaf results describe one validated value; structural results describe
    a container that is missing required keys or carries disallowed ones.

    Attributes:
        key: Property name for leaf results, "" for structural results
        value: The validated value (or the offending container)
        success: Whether the check passed
        error: Rendered error message ("" on success)
        kind: ErrorKind of the failure (None on success)
        path: Dotted location in the input (e.g. "work.office", "tags[1]")
    """

    def __init__(
        self,
        key: str,
        value: Any,
        success: bool,
        error: str = "",
        kind: Optional[ErrorKind] = None,
        path: str = "",
    ):
        self.key = key
        self.value = value
        self.success = success
        self.error = error
        self.kind = kind
        self.path = path

    @classmethod
    def structural(
        cls, kind: ErrorKind, names: List[str], container: Any, path: str = ""
    ) -> "Result":
        """Build a failed container-level result listing the offending names."""
        return cls(
            key="",
            value=container,
            success=False,
            error=render_error(kind, names),
            kind=kind,
            path=path,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the public ``{key, value, success, error}`` shape."""
        return {
            "key": self.key,
            "value": self.value,
            "success": self.success,
            "error": self.error,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (
            self.to_dict() == other.to_dict()
            and self.kind == other.kind
            and self.path == other.path
        )

    def __repr__(self) -> str:
        return (
            f"Result(key={self.key!r}, success={self.success!r}, "
            f"error={self.error!r}, path={self.path!r})"
        )


class ValidationReport:
    """
    Final outcome of one ``test()`` call.

    Attributes:
        success: True iff every leaf result passed and no structural error occurred
        errors: Structural errors first, then failed leaf results, in traversal order
    """

    def __init__(self, success: bool, errors: List[Result]):
        self.success = success
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "errors": [e.to_dict() for e in self.errors],
        }

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        return f"ValidationReport(success={self.success!r}, errors={len(self.errors)})"


class MikroValidError(Exception):
    """Base class for fatal conditions that abort a validation call."""


class MissingInputError(MikroValidError, ValueError):
    """Raised when the input value is absent (None)."""

    def __init__(self, message: str = "Missing input!"):
        super().__init__(message)


class InvalidInputError(MikroValidError, TypeError):
    """Raised when the root input is not a mapping."""


class SchemaDefinitionError(MikroValidError, ValueError):
    """
    Raised when a declarative schema cannot be normalized.

    Attributes:
        problems: Every problem found, as human-readable messages
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(
            f"Invalid schema: {len(self.problems)} problem(s): "
            + "; ".join(self.problems)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "problems": self.problems}


class RecursionLimitError(MikroValidError):
    """
    Raised when nesting exceeds the configured depth or a container is cyclic.

    Attributes:
        path: Location in the input where the walk was stopped
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class DocumentError(MikroValidError, ValueError):
    """Raised when a schema or input document cannot be parsed."""
