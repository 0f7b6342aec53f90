"""Factories for homogeneous sequence and map descriptors."""

from api_lint_types.model.base import NodeType


def list_of(type_name: str, **overrides) -> NodeType:
    """Return a descriptor for an ordered list whose every element is `type_name`.

    `overrides` may only carry descriptive fields (description, documentation_link).
    """
    return NodeType(name="list", properties={}, items=type_name, **_descriptive(overrides))


def map_of(type_name: str, **overrides) -> NodeType:
    """Return a descriptor for a string-keyed map whose every value is `type_name`."""
    return NodeType(name="map", properties={}, additional_properties=type_name, **_descriptive(overrides))


def _descriptive(overrides: dict) -> dict:
    unknown = set(overrides) - {"description", "documentation_link"}
    if unknown:
        raise TypeError(f"Combinator overrides must be descriptive only, got: {', '.join(sorted(unknown))}")
    return overrides
