"""Node-level checks: required keys, disjunctive requirements, allow-lists and leaves.

None of these raise on document problems. Each returns a list of Violation
for the caller to aggregate.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from api_lint_types.model.base import LeafConstraint, NodeType, Violation, ViolationCode
from api_lint_types.model.resolve import DEGRADED_ERRORS

logger = logging.getLogger(__name__)

JSON_TYPES = {
    "string": (str,),
    "boolean": (bool,),
    "integer": (int,),
    "number": (int, float),
    "array": (list, tuple),
    "object": (Mapping,),
    "null": (type(None),),
}


def required_keys(descriptor: NodeType, value: Any) -> list[str]:
    """Resolve the required key list for `value` (conditional when callable)."""
    required = descriptor.required
    if callable(required):
        try:
            required = required(value)
        except DEGRADED_ERRORS as e:
            logger.debug("Required keys of %s failed on %r: %s", descriptor.name, value, e)
            return []
    return list(required or [])


def check_required(descriptor: NodeType, value: Any, path: list | None = None) -> list[Violation]:
    """Report every required key absent from the node's own keys."""
    if not isinstance(value, Mapping):
        return []
    return [
        Violation(
            code=ViolationCode.MISSING_REQUIRED,
            type_name=descriptor.name,
            key=key,
            path=list(path or []),
            message=f"The field `{key}` must be present on this level.",
        )
        for key in required_keys(descriptor, value)
        if key not in value
    ]


def check_required_one_of(descriptor: NodeType, value: Any, path: list | None = None) -> list[Violation]:
    """Report a violation if none of `required_one_of` is present."""
    if not isinstance(value, Mapping) or not descriptor.required_one_of:
        return []
    if any(key in value for key in descriptor.required_one_of):
        return []
    names = ", ".join(f"`{k}`" for k in descriptor.required_one_of)
    return [
        Violation(
            code=ViolationCode.MISSING_REQUIRED_ONE_OF,
            type_name=descriptor.name,
            path=list(path or []),
            message=f"Must contain at least one of the following fields: {names}.",
        )
    ]


def check_allowed(descriptor: NodeType, value: Any, path: list | None = None) -> list[Violation]:
    """Report keys outside the descriptor's allow-list.

    Extension keys are never reported. Without an `allowed` function
    nothing is reported here; unknown keys are found by child resolution.
    """
    if not isinstance(value, Mapping) or descriptor.allowed is None:
        return []
    try:
        allowed = set(descriptor.allowed(value) or [])
    except DEGRADED_ERRORS as e:
        logger.debug("Allowed keys of %s failed on %r: %s", descriptor.name, value, e)
        return []
    prefix = descriptor.extensions_prefix
    violations = []
    for key in value:
        key = str(key)
        if key in allowed or (prefix and key.startswith(prefix)):
            continue
        violations.append(
            Violation(
                code=ViolationCode.DISALLOWED_KEY,
                type_name=descriptor.name,
                key=key,
                path=list(path or []) + [key],
                message=f"Property `{key}` is not allowed here.",
            )
        )
    return violations


def check_node(descriptor: NodeType, value: Any, path: list | None = None) -> list[Violation]:
    """Run required, required-one-of and allow-list checks for one node."""
    violations = []
    violations.extend(check_required(descriptor, value, path))
    violations.extend(check_required_one_of(descriptor, value, path))
    violations.extend(check_allowed(descriptor, value, path))
    return violations


def check_leaf(leaf: LeafConstraint, value: Any, path: list | None = None, type_name: str = "") -> list[Violation]:
    """Validate a value against a leaf constraint.

    Non-resolvable subtrees are accepted verbatim. Example payloads are
    only checked against the leaf's own type, never their contents.
    """
    path = list(path or [])
    if not leaf.resolvable:
        return []

    def violation(code: ViolationCode, message: str) -> Violation:
        key = path[-1] if path else None
        return Violation(code=code, type_name=type_name, key=None if key is None else str(key), path=path, message=message)

    if leaf.type and not matches_type(leaf.type, value):
        return [violation(ViolationCode.TYPE_MISMATCH, f"Expected type `{leaf.type}` but got `{json_type(value)}`.")]
    if leaf.is_example:
        return []

    violations = []
    if leaf.enum is not None and value not in leaf.enum:
        allowed = ", ".join(f"`{v}`" for v in leaf.enum)
        violations.append(violation(ViolationCode.ENUM_MISMATCH, f"`{value}` should be one of the allowed values: {allowed}."))

    if _is_number(value):
        if leaf.minimum is not None and value < leaf.minimum:
            violations.append(violation(ViolationCode.OUT_OF_RANGE, f"Value must be greater than or equal to {leaf.minimum}."))
        if leaf.maximum is not None and value > leaf.maximum:
            violations.append(violation(ViolationCode.OUT_OF_RANGE, f"Value must be less than or equal to {leaf.maximum}."))

    if leaf.pattern is not None and isinstance(value, str) and not re.search(leaf.pattern, value):
        violations.append(violation(ViolationCode.PATTERN_MISMATCH, f"`{value}` does not match the pattern `{leaf.pattern}`."))

    if isinstance(value, (list, tuple)):
        if leaf.min_items is not None and len(value) < leaf.min_items:
            violations.append(violation(ViolationCode.CARDINALITY, f"Expected at least {leaf.min_items} items but got {len(value)}."))
        if leaf.max_items is not None and len(value) > leaf.max_items:
            violations.append(violation(ViolationCode.CARDINALITY, f"Expected at most {leaf.max_items} items but got {len(value)}."))
        if leaf.items is not None:
            for i, item in enumerate(value):
                violations.extend(check_leaf(leaf.items, item, path + [i], type_name))

    if isinstance(value, Mapping) and leaf.additional_properties is not None:
        for k, item in value.items():
            violations.extend(check_leaf(leaf.additional_properties, item, path + [str(k)], type_name))

    return violations


def matches_type(expected: str, value: Any) -> bool:
    if expected in ("integer", "number") and isinstance(value, bool):
        return False
    if expected == "integer" and isinstance(value, float):
        return value.is_integer()
    types = JSON_TYPES.get(expected)
    if types is None:
        return True
    return isinstance(value, types)


def json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
