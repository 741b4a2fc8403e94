"""
Document Loading for MikroValid.

Reads schema and input documents from any fsspec-compatible location:
- Local paths and file:// URIs
- Remote storage (s3://, gs://, az://, https://, ...) when the backend is installed

Documents ending in .yaml/.yml are parsed with PyYAML, everything else as JSON.
Schema documents are outline-checked against a JSON Schema (Draft 7) meta
schema before use, so every structural mistake is reported at once.

Example:
    >>> from mikrovalid.loader import load_schema, load_document
    >>> schema = load_schema("schemas/user.yaml")
    >>> data = load_document("s3://bucket/users/42.json")
"""

import json
from typing import Any, Dict, List

import fsspec
import yaml
from jsonschema import Draft7Validator

from .errors import DocumentError, SchemaDefinitionError
from .schema import VALID_FORMATS, VALID_TYPES, parse_schema

YAML_SUFFIXES = (".yaml", ".yml")

META_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["properties"],
    "properties": {
        "properties": {"$ref": "#/definitions/node"},
        "required": {"$ref": "#/definitions/required"},
        "additionalProperties": {"type": "boolean"},
    },
    "definitions": {
        "required": {"type": "array", "items": {"type": "string"}},
        "length": {"type": "integer", "minimum": 0},
        "node": {
            "type": "object",
            "properties": {
                "type": {"enum": list(VALID_TYPES)},
                "format": {"enum": list(VALID_FORMATS)},
                "minLength": {"$ref": "#/definitions/length"},
                "maxLength": {"$ref": "#/definitions/length"},
                "minValue": {"type": "number"},
                "maxValue": {"type": "number"},
                "matchesPattern": {"type": "string"},
                "items": {"$ref": "#/definitions/node"},
                "required": {"$ref": "#/definitions/required"},
                "additionalProperties": {"type": "boolean"},
            },
            "additionalProperties": {"$ref": "#/definitions/node"},
        },
    },
}

_meta_validator = Draft7Validator(META_SCHEMA)


def is_yaml(uri: str) -> bool:
    return uri.lower().endswith(YAML_SUFFIXES)


def load_document(uri: str) -> Any:
    """
    Read and parse a JSON or YAML document.

    Args:
        uri: Local path or fsspec URI

    Returns:
        Parsed document

    Raises:
        FileNotFoundError: If the document does not exist
        DocumentError: If the content is not valid JSON/YAML
    """
    try:
        with fsspec.open(uri, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Document not found: {uri}")

    if is_yaml(uri):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DocumentError(f"Invalid YAML in {uri}: {e}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON in {uri}: {e}") from e


def check_schema_document(document: Any) -> List[str]:
    """Return every outline problem of a schema document (empty when valid)."""
    problems = []
    errors = sorted(
        _meta_validator.iter_errors(document),
        key=lambda e: [str(part) for part in e.path],
    )
    for error in errors:
        location = "/".join(str(part) for part in error.path) or "<root>"
        problems.append(f"{location}: {error.message}")
    return problems


def load_schema(uri: str) -> Dict[str, Any]:
    """
    Load a schema document and check it before use.

    Raises:
        FileNotFoundError: If the document does not exist
        DocumentError: If the content is not valid JSON/YAML
        SchemaDefinitionError: If the document is not a valid schema
    """
    document = load_document(uri)
    problems = check_schema_document(document)
    if problems:
        raise SchemaDefinitionError(problems)
    # Catches what the outline check cannot, such as uncompilable patterns
    parse_schema(document)
    return document


def dump_document(document: Any, fmt: str = "json") -> str:
    """Render a document as JSON (indent 2) or YAML."""
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False)
    raise ValueError(f"Unsupported format '{fmt}', must be json or yaml")
