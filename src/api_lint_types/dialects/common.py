"""Leaf constraints shared by the dialect tables."""

from collections.abc import Mapping

from api_lint_types.model.base import LeafConstraint

EXTENSIONS_PREFIX = "x-"

STRING = LeafConstraint(type="string")
BOOLEAN = LeafConstraint(type="boolean")
INTEGER = LeafConstraint(type="integer")
NUMBER = LeafConstraint(type="number")
OBJECT = LeafConstraint(type="object")
ANY = LeafConstraint()
STRING_LIST = LeafConstraint(type="array", items=STRING)
NON_NEGATIVE_INTEGER = LeafConstraint(type="integer", minimum=0)
EXAMPLE = LeafConstraint(is_example=True)
NOT_RESOLVABLE = LeafConstraint(resolvable=False)
SCOPES = LeafConstraint(type="object", additional_properties=STRING)


def string(description: str = "", documentation_link: str | None = None) -> LeafConstraint:
    return LeafConstraint(type="string", description=description, documentation_link=documentation_link)


def enum_of(*values, type: str | None = None) -> LeafConstraint:
    return LeafConstraint(type=type, enum=list(values))


def discriminant(value, field: str) -> str | None:
    """Return the string value of a discriminant field, or None."""
    if not isinstance(value, Mapping):
        return None
    found = value.get(field)
    return found if isinstance(found, str) else None
