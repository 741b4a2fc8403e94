"""
Schema Inference for MikroValid.

Derives a conservative declarative schema from a sample value:
- Every key seen is required, additional properties are disallowed
- Strings must be non-empty (minLength 1)
- Arrays gain an ``items`` schema only when their non-blank elements share one type
- Keys a schema cannot declare (metadata names such as ``type``, or non-string
  keys) are left out, and that level allows additional properties instead

The result is a plain dict in the same declarative format test() accepts,
so it can be serialized, edited by hand, or passed straight back in.

Example:
    >>> schema_from({"name": "Sam", "tags": ["a", "b"]})
    {'properties': {'name': {'type': 'string', 'minLength': 1},
                    'tags': {'type': 'array', 'items': {'type': 'string', 'minLength': 1}}},
     'additionalProperties': False,
     'required': ['name', 'tags']}
"""

import logging
from typing import Any, Callable, Dict, Optional

from .engine import DEFAULT_MAX_DEPTH
from .errors import InvalidInputError, MissingInputError, RecursionLimitError
from .schema import RESERVED_KEYS, VALID_TYPES

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


def runtime_type(value: Any) -> str:
    """Name the declarative type of a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_declarable(key: Any) -> bool:
    """Whether a data key can be declared as a child property."""
    return isinstance(key, str) and key not in RESERVED_KEYS


def _is_blank(value: Any) -> bool:
    # Empty containers are values, not blanks
    if isinstance(value, (list, tuple, dict)):
        return False
    return not value


def schema_from(
    sample: Any,
    *,
    sink: Optional[Sink] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """
    Build a root schema describing ``sample``.

    Args:
        sample: Mapping to describe
        sink: Receives diagnostics (skipped array items, untyped nulls)
        max_depth: Deepest nesting level that may be described

    Returns:
        Declarative root schema ``{properties, additionalProperties, required}``

    Raises:
        MissingInputError: If sample is None
        InvalidInputError: If sample is not a mapping
        RecursionLimitError: If nesting exceeds ``max_depth``
    """
    if sample is None:
        raise MissingInputError()
    if not isinstance(sample, dict):
        raise InvalidInputError(
            f"Sample must be a mapping, got {type(sample).__name__}"
        )

    inferrer = _Inferrer(sink, max_depth)
    properties = inferrer.children(sample, path="", depth=0)
    return {
        "properties": properties,
        "additionalProperties": len(properties) < len(sample),
        "required": list(properties),
    }


class _Inferrer:
    def __init__(self, sink: Optional[Sink], max_depth: int):
        self.sink = sink
        self.max_depth = max_depth

    def warn(self, message: str) -> None:
        if self.sink is not None:
            self.sink(message)

    def children(self, data: Dict[str, Any], path: str, depth: int) -> Dict[str, Any]:
        if depth > self.max_depth:
            raise RecursionLimitError(
                f"Maximum nesting depth of {self.max_depth} exceeded at '{path}'",
                path=path,
            )
        result: Dict[str, Any] = {}
        for key, value in data.items():
            child_path = f"{path}.{key}" if path else str(key)
            if not is_declarable(key):
                self.warn(
                    f"Cannot declare key '{key}' at '{child_path}' in a schema. "
                    "Allowing additional properties instead..."
                )
                continue
            result[key] = self.describe(value, child_path, depth)
        return result

    def describe(self, value: Any, path: str, depth: int) -> Dict[str, Any]:
        if isinstance(value, (list, tuple)):
            return self.array(value, path, depth)
        if isinstance(value, dict):
            return self.object(value, path, depth)
        if value is None:
            self.warn(f"Cannot infer a type for null value at '{path}'. Leaving it unconstrained...")
            return {}
        return self.primitive(value, path)

    def object(self, value: Dict[str, Any], path: str, depth: int) -> Dict[str, Any]:
        children = self.children(value, path, depth + 1)
        schema: Dict[str, Any] = {
            "type": "object",
            "additionalProperties": len(children) < len(value),
            "required": list(children),
        }
        schema.update(children)
        return schema

    def array(self, value: Any, path: str, depth: int) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "array"}

        elements = [element for element in value if not _is_blank(element)]
        if not elements:
            return schema

        types = {runtime_type(element) for element in elements}
        if len(types) > 1:
            self.warn(
                f"Array item schema generation skipped for '{path}': "
                f"mixed element types ({', '.join(sorted(types))})"
            )
            return schema

        first = elements[0]
        if isinstance(first, dict):
            schema["items"] = self.object(first, f"{path}[0]", depth)
        else:
            schema["items"] = self.primitive(first, f"{path}[0]")
        logger.debug("Inferred items for '%s' as %s", path, schema["items"].get("type"))
        return schema

    def primitive(self, value: Any, path: str) -> Dict[str, Any]:
        kind = runtime_type(value)
        if kind not in VALID_TYPES:
            self.warn(f"Cannot infer a type for {kind} value at '{path}'. Leaving it unconstrained...")
            return {}
        schema: Dict[str, Any] = {"type": kind}
        if kind == "string":
            schema["minLength"] = 1
        return schema
