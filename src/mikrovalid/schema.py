"""
Schema Models for MikroValid.

Normalizes the compact declarative schema format into a tagged tree once,
before any validation starts:
- PropertySchema: Leaf constraint set (type, format, length, range, pattern, items)
- ObjectSchema: Node with named children plus required/additionalProperties rules

Declarative format (metadata and children share one level; any key that is
not reserved is a child):

    {
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "work": {
                "type": "object",
                "office": {"type": "string"},
                "required": ["office"],
                "additionalProperties": False,
            },
            "required": ["name"],
        }
    }
"""

import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import SchemaDefinitionError

VALID_TYPES = ("string", "number", "boolean", "object", "array")
VALID_FORMATS = ("alphanumeric", "numeric", "email", "date", "url", "hexColor")

# Keys that carry metadata rather than naming a child property
RESERVED_KEYS = frozenset(
    {
        "required",
        "additionalProperties",
        "type",
        "format",
        "minLength",
        "maxLength",
        "minValue",
        "maxValue",
        "matchesPattern",
        "items",
    }
)

Number = Union[int, float]


class PropertySchema:
    """
    Leaf-level constraint set for a single value.

    Attributes:
        type: Expected type (string, number, boolean, object, array)
        format: Named string format (alphanumeric, numeric, email, date, url, hexColor)
        min_length: Minimum length (arrays: element count, scalars: text length)
        max_length: Maximum length
        min_value: Inclusive numeric lower bound
        max_value: Inclusive numeric upper bound
        pattern: Compiled regular expression the text form must match
        items: Schema applied to every element of an array value
    """

    def __init__(
        self,
        type: Optional[str] = None,
        format: Optional[str] = None,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        min_value: Optional[Number] = None,
        max_value: Optional[Number] = None,
        pattern: Optional["re.Pattern[str]"] = None,
        items: Optional["PropertySchema"] = None,
    ):
        self.type = type
        self.format = format
        self.min_length = min_length
        self.max_length = max_length
        self.min_value = min_value
        self.max_value = max_value
        self.pattern = pattern
        self.items = items

    @property
    def is_object(self) -> bool:
        return False

    def constraints(self) -> Iterator[Tuple[str, Any]]:
        """Yield declared (name, value) constraints in dispatch order."""
        for name, value in (
            ("type", self.type),
            ("format", self.format),
            ("minLength", self.min_length),
            ("maxLength", self.max_length),
            ("minValue", self.min_value),
            ("maxValue", self.max_value),
            ("matchesPattern", self.pattern),
        ):
            if value is not None:
                yield name, value

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the declarative representation."""
        result: Dict[str, Any] = {}
        for name, value in self.constraints():
            result[name] = value.pattern if name == "matchesPattern" else value
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result

    def __repr__(self) -> str:
        attrs = [f"{name}={value!r}" for name, value in self.constraints()]
        return f"{type(self).__name__}({', '.join(attrs)})"


class ObjectSchema(PropertySchema):
    """
    Schema node describing a mapping with named children.

    Carries its own leaf constraints (usually ``type: object``) in addition
    to the container rules.

    Attributes:
        children: Child schemas by property name, in declaration order
        required: Property names that must be present at this level
        additional_properties: Whether undeclared keys are allowed
    """

    def __init__(
        self,
        children: Optional[Dict[str, PropertySchema]] = None,
        required: Optional[List[str]] = None,
        additional_properties: bool = True,
        **constraints: Any,
    ):
        super().__init__(**constraints)
        self.children = children or {}
        self.required = required or []
        self.additional_properties = additional_properties

    @property
    def is_object(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if not self.additional_properties:
            result["additionalProperties"] = False
        if self.required:
            result["required"] = list(self.required)
        for name, child in self.children.items():
            result[name] = child.to_dict()
        return result

    def __repr__(self) -> str:
        return (
            f"ObjectSchema(children={list(self.children)}, required={self.required!r}, "
            f"additional_properties={self.additional_properties!r})"
        )


def parse_schema(schema: Any) -> ObjectSchema:
    """
    Normalize a root schema ``{properties, required?, additionalProperties?}``.

    Root-level ``required`` names are appended to those declared inside
    ``properties``; a root-level ``additionalProperties`` overrides the one
    inside ``properties``. All problems are collected before raising.

    Args:
        schema: Declarative root schema, or an already normalized ObjectSchema

    Returns:
        Normalized root ObjectSchema

    Raises:
        SchemaDefinitionError: If the schema is malformed
    """
    if isinstance(schema, ObjectSchema):
        return schema
    if not isinstance(schema, Mapping):
        raise SchemaDefinitionError(
            [f"schema: must be a mapping, got {type(schema).__name__}"]
        )
    if "properties" not in schema:
        raise SchemaDefinitionError(["schema: missing 'properties'"])

    problems: List[str] = []
    root = _parse_node(schema["properties"], "properties", problems, force_object=True)

    required = _parse_required(schema, "schema", problems)
    additional = _parse_additional(schema, "schema", problems)

    if problems:
        raise SchemaDefinitionError(problems)

    assert isinstance(root, ObjectSchema)
    for name in required or []:
        if name not in root.required:
            root.required.append(name)
    if additional is not None:
        root.additional_properties = additional
    return root


def parse_node(raw: Any, path: str = "node") -> PropertySchema:
    """Normalize a single (non-root) declarative node."""
    problems: List[str] = []
    node = _parse_node(raw, path, problems)
    if problems:
        raise SchemaDefinitionError(problems)
    return node


def _parse_node(
    raw: Any, path: str, problems: List[str], force_object: bool = False
) -> PropertySchema:
    if not isinstance(raw, Mapping):
        problems.append(f"{path}: must be a mapping, got {type(raw).__name__}")
        return PropertySchema()

    constraints = _parse_constraints(raw, path, problems)

    children: Dict[str, PropertySchema] = {}
    for key, value in raw.items():
        if key not in RESERVED_KEYS:
            children[key] = _parse_node(value, f"{path}.{key}", problems)

    required = _parse_required(raw, path, problems)
    additional = _parse_additional(raw, path, problems)

    if force_object or children or required is not None or additional is not None:
        return ObjectSchema(
            children=children,
            required=required,
            additional_properties=True if additional is None else additional,
            **constraints,
        )
    return PropertySchema(**constraints)


def _parse_constraints(
    raw: Mapping, path: str, problems: List[str]
) -> Dict[str, Any]:
    constraints: Dict[str, Any] = {}

    type_ = raw.get("type")
    if type_ is not None:
        if type_ not in VALID_TYPES:
            problems.append(
                f"{path}.type: invalid type {type_!r}, must be one of: {', '.join(VALID_TYPES)}"
            )
        else:
            constraints["type"] = type_

    format_ = raw.get("format")
    if format_ is not None:
        if format_ not in VALID_FORMATS:
            problems.append(
                f"{path}.format: invalid format {format_!r}, must be one of: {', '.join(VALID_FORMATS)}"
            )
        else:
            constraints["format"] = format_

    for key, attr in (("minLength", "min_length"), ("maxLength", "max_length")):
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            problems.append(f"{path}.{key}: must be a non-negative integer, got {value!r}")
        else:
            constraints[attr] = value

    for key, attr in (("minValue", "min_value"), ("maxValue", "max_value")):
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            problems.append(f"{path}.{key}: must be a number, got {value!r}")
        else:
            constraints[attr] = value

    pattern = raw.get("matchesPattern")
    if pattern is not None:
        if isinstance(pattern, re.Pattern):
            constraints["pattern"] = pattern
        elif isinstance(pattern, str):
            try:
                constraints["pattern"] = re.compile(pattern)
            except re.error as e:
                problems.append(f"{path}.matchesPattern: invalid regex {pattern!r}: {e}")
        else:
            problems.append(
                f"{path}.matchesPattern: must be a string or compiled pattern, got {type(pattern).__name__}"
            )

    items = raw.get("items")
    if items is not None:
        constraints["items"] = _parse_node(items, f"{path}.items", problems)

    return constraints


def _parse_required(raw: Mapping, path: str, problems: List[str]) -> Optional[List[str]]:
    required = raw.get("required")
    if required is None:
        return None
    if not isinstance(required, (list, tuple)) or not all(
        isinstance(name, str) for name in required
    ):
        problems.append(f"{path}.required: must be a list of property names")
        return None
    return list(required)


def _parse_additional(raw: Mapping, path: str, problems: List[str]) -> Optional[bool]:
    additional = raw.get("additionalProperties")
    if additional is None:
        return None
    if not isinstance(additional, bool):
        problems.append(
            f"{path}.additionalProperties: must be a boolean, got {additional!r}"
        )
        return None
    return additional
