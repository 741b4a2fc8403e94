"""
Validation Engine for MikroValid.

Walks a normalized schema tree alongside an input tree:
- Required key enforcement (one structural error per level)
- Additional property rejection (one structural error per level)
- Field-level checks on every declared, present property
- Shallow array item checks against ``items``
- Recursion into nested objects, sharing the accumulators
- Error aggregation into the final report
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Set

from .errors import ErrorKind, RecursionLimitError, Result, render_error
from .schema import ObjectSchema, PropertySchema
from .validators import as_text, is_array, is_object, validate_input

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64

Sink = Callable[[str], None]


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def validate(
    node: ObjectSchema,
    data: Dict[str, Any],
    results: Optional[List[Result]] = None,
    errors: Optional[List[Result]] = None,
    *,
    path: str = "",
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    sink: Optional[Sink] = None,
    _active: Optional[Set[int]] = None,
) -> Dict[str, List[Result]]:
    """
    Recursively check one schema/input pair.

    Leaf results and structural errors are appended to the shared
    ``results`` and ``errors`` lists, which are created when not given.

    Args:
        node: Normalized object schema for this level
        data: Input mapping for this level
        results: Accumulator for leaf results
        errors: Accumulator for structural errors
        path: Dotted location of ``data`` in the root input
        depth: Current nesting level (root is 0)
        max_depth: Deepest nesting level that may be entered
        sink: Receives diagnostics about undeclared properties

    Returns:
        Dict with "results" and "errors" (the accumulators)

    Raises:
        RecursionLimitError: On nesting beyond ``max_depth`` or cyclic input
    """
    if results is None:
        results = []
    if errors is None:
        errors = []
    if _active is None:
        _active = set()

    if depth > max_depth:
        raise RecursionLimitError(
            f"Maximum nesting depth of {max_depth} exceeded at '{path}'", path=path
        )
    if id(data) in _active:
        raise RecursionLimitError(f"Cyclic input detected at '{path}'", path=path)
    _active.add(id(data))

    missing = [name for name in node.required if name not in data]
    if missing:
        errors.append(
            Result.structural(ErrorKind.MISSING_REQUIRED_KEY, missing, data, path)
        )

    if not node.additional_properties:
        extras = [key for key in data if key not in node.children]
        if extras:
            errors.append(
                Result.structural(
                    ErrorKind.DISALLOWED_ADDITIONAL_PROPERTY, extras, data, path
                )
            )

    if sink is not None:
        for key, value in data.items():
            if key not in node.children:
                sink(f"Missing property '{key}' for match '{as_text(value)}'. Skipping...")

    for key, child in node.children.items():
        value = data.get(key)
        if value is None:
            continue
        child_path = _join(path, key)

        results.append(check_property(key, child, value, child_path))

        if is_array(value) and child.items is not None:
            for index, element in enumerate(value):
                results.append(
                    check_property(key, child.items, element, f"{child_path}[{index}]")
                )

        if is_object(value) and isinstance(child, ObjectSchema):
            logger.debug("Descending into '%s'", child_path)
            validate(
                child,
                value,
                results,
                errors,
                path=child_path,
                depth=depth + 1,
                max_depth=max_depth,
                sink=sink,
                _active=_active,
            )

    _active.discard(id(data))
    return {"results": results, "errors": errors}


def check_property(key: str, schema: PropertySchema, value: Any, path: str = "") -> Result:
    """Validate one value and wrap the outcome in a leaf Result."""
    check = validate_input(schema, value)
    return Result(
        key=key,
        value=value,
        success=check.success,
        error=render_error(check.kind),
        kind=check.kind,
        path=path or key,
    )


def compile_errors(results: List[Result], errors: List[Result]) -> List[Result]:
    """Structural errors in traversal order, then failed leaf results in traversal order."""
    return list(errors) + [result for result in results if not result.success]


def is_successful(results: List[Result], errors: List[Result]) -> bool:
    return all(result.success for result in results) and not errors
