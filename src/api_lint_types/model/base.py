"""Core data models for node type descriptors.

A dialect is described as a set of named NodeType descriptors. Each
descriptor maps property keys to property rules, and the walker asks the
descriptor which rule governs a given child.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict


class LeafConstraint(BaseModel):
    """Terminal validation facts for a single value.

    An empty LeafConstraint() accepts any value.
    """

    model_config = ConfigDict(frozen=True)

    type: str | None = None  # string / number / integer / boolean / array / object / null
    enum: list | None = None
    minimum: float | None = None
    maximum: float | None = None
    pattern: str | None = None
    min_items: int | None = None
    max_items: int | None = None
    items: "LeafConstraint | None" = None
    additional_properties: "LeafConstraint | None" = None
    is_example: bool = False
    resolvable: bool = True
    direct_resolve_as: str | None = None
    description: str = ""
    documentation_link: str | None = None


# A resolver is called as resolver(value, key) and returns a type name, a
# LeafConstraint, or None when it cannot determine a rule (key rejected).
Resolver = Callable[[Any, Any], Union[str, LeafConstraint, None]]

PropertyRule = Union[str, LeafConstraint, Resolver, None]


class NodeType(BaseModel):
    """A named node-shape description.

    Rules referring to other descriptors use type names, never instances,
    so descriptors may reference themselves or types defined later.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = ""
    properties: dict[str, PropertyRule] = {}
    additional_properties: PropertyRule = None
    items: PropertyRule = None  # set only on sequence descriptors
    required: list[str] | Callable[[Any], list[str]] = []
    required_one_of: list[str] | None = None
    allowed: Callable[[Any], list[str]] | None = None
    extensions_prefix: str | None = None
    description: str = ""
    documentation_link: str | None = None

    @property
    def is_sequence(self) -> bool:
        return self.items is not None


class FrozenNodeType(NodeType):
    """Read-only descriptor handed out by a frozen registry."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @classmethod
    def of(cls, descriptor: NodeType) -> "FrozenNodeType":
        fields = dict(descriptor.__dict__)
        fields["properties"] = MappingProxyType(dict(descriptor.properties))
        if not callable(descriptor.required):
            fields["required"] = tuple(descriptor.required)
        if descriptor.required_one_of is not None:
            fields["required_one_of"] = tuple(descriptor.required_one_of)
        return cls.model_construct(**fields)


class ViolationCode(str, Enum):
    UNKNOWN_KEY = "unknown-key"
    MISSING_REQUIRED = "missing-required"
    MISSING_REQUIRED_ONE_OF = "missing-required-one-of"
    DISALLOWED_KEY = "disallowed-key"
    TYPE_MISMATCH = "type-mismatch"
    ENUM_MISMATCH = "enum-mismatch"
    OUT_OF_RANGE = "out-of-range"
    PATTERN_MISMATCH = "pattern-mismatch"
    CARDINALITY = "cardinality"
    UNRESOLVED_REF = "unresolved-ref"
    MAPPING_TARGET_NOT_SCHEMA = "mapping-target-not-schema"


class Violation(BaseModel):
    """A single document shape violation."""

    code: ViolationCode
    type_name: str
    key: str | None = None
    path: list[str | int] = []
    message: str
