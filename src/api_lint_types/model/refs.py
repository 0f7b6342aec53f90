"""Reference classification for discriminator mapping values."""

from typing import Any

from api_lint_types.model.base import LeafConstraint

POINTER_PREFIXES = ("#", "https://", "http://", "./", "../")

ALIAS = LeafConstraint(type="string")
SCHEMA_POINTER = LeafConstraint(type="string", direct_resolve_as="Schema")


def is_mapping_ref(value: Any) -> bool:
    """Return True if a mapping value looks like a pointer rather than a schema name."""
    if not isinstance(value, str):
        return False
    return value.startswith(POINTER_PREFIXES) or "/" in value


def classify_mapping_entry(value: Any, key: Any = None) -> LeafConstraint:
    """Classify a discriminator mapping value.

    Plain labels such as "Dog" are aliases and stay ordinary strings. Pointer
    shaped values ("#/components/schemas/Dog", "./dog.yaml") must be resolved
    immediately as a Schema.
    """
    if is_mapping_ref(value):
        return SCHEMA_POINTER
    return ALIAS
