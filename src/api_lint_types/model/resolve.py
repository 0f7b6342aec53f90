"""Child resolution: which rule governs a given key of a node."""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

from api_lint_types.model.base import LeafConstraint, NodeType, PropertyRule

logger = logging.getLogger(__name__)

# Raised by resolvers that receive a value shape they do not expect.
DEGRADED_ERRORS = (TypeError, AttributeError, KeyError, ValueError)


class ChildKind(str, Enum):
    REFERENCE = "reference"  # recurse into type_name
    LEAF = "leaf"  # check the value against leaf
    UNVALIDATED = "unvalidated"  # recognized, no further checks
    EXTENSION = "extension"  # matches the extensions prefix
    REJECTED = "rejected"  # unknown key


class ResolvedChild(BaseModel):
    """Outcome of resolving one child of a node."""

    kind: ChildKind
    key: str | int
    type_name: str | None = None
    leaf: LeafConstraint | None = None

    @property
    def accepted(self) -> bool:
        return self.kind != ChildKind.REJECTED


def resolve_child(descriptor: NodeType, key: str | int, value: Any) -> ResolvedChild:
    """Resolve the rule governing `key` (holding `value`) under `descriptor`.

    Explicit properties always win over the extensions prefix and
    additional_properties.
    """
    if descriptor.is_sequence:
        if _is_index(key):
            return _apply(descriptor, descriptor.items, key, value)
        return ResolvedChild(kind=ChildKind.REJECTED, key=key)

    if isinstance(key, str):
        if key in descriptor.properties:
            return _apply(descriptor, descriptor.properties[key], key, value)
        if descriptor.extensions_prefix and key.startswith(descriptor.extensions_prefix):
            return ResolvedChild(kind=ChildKind.EXTENSION, key=key)

    if descriptor.additional_properties is not None:
        return _apply(descriptor, descriptor.additional_properties, key, value)

    return ResolvedChild(kind=ChildKind.REJECTED, key=key)


def _apply(descriptor: NodeType, rule: PropertyRule, key: str | int, value: Any) -> ResolvedChild:
    if callable(rule):
        try:
            rule = rule(value, key)
        except DEGRADED_ERRORS as e:
            logger.debug("Resolver for %s.%s failed on %r: %s", descriptor.name, key, value, e)
            return ResolvedChild(kind=ChildKind.UNVALIDATED, key=key)
        if rule is None:
            return ResolvedChild(kind=ChildKind.REJECTED, key=key)
    return _outcome(rule, key)


def _outcome(rule: PropertyRule, key: str | int) -> ResolvedChild:
    if rule is None:
        return ResolvedChild(kind=ChildKind.UNVALIDATED, key=key)
    if isinstance(rule, str):
        return ResolvedChild(kind=ChildKind.REFERENCE, key=key, type_name=rule)
    if isinstance(rule, LeafConstraint):
        return ResolvedChild(kind=ChildKind.LEAF, key=key, leaf=rule)
    logger.debug("Unsupported rule %r for key %r", rule, key)
    return ResolvedChild(kind=ChildKind.UNVALIDATED, key=key)


def _is_index(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return isinstance(key, str) and key.isdigit()
