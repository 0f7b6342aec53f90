"""JSON Schema draft-7 shapes shared by dialects that embed it (AsyncAPI 2)."""

from api_lint_types.dialects.common import (
    ANY,
    BOOLEAN,
    EXAMPLE,
    NON_NEGATIVE_INTEGER,
    NUMBER,
    STRING,
    STRING_LIST,
    enum_of,
)
from api_lint_types.model.base import LeafConstraint, NodeType
from api_lint_types.model.combinators import list_of
from api_lint_types.model.refs import classify_mapping_entry

JSON_TYPE_NAMES = ("object", "array", "string", "number", "integer", "boolean", "null")


def schema_or_list(value, key):
    """`items` holds either one schema or a positional list of schemas."""
    if isinstance(value, list):
        return "SchemaList"
    return "Schema"


def schema_or_boolean(value, key):
    if isinstance(value, bool):
        return BOOLEAN
    return "Schema"


def type_name_or_list(value, key):
    if isinstance(value, list):
        return LeafConstraint(type="array", items=enum_of(*JSON_TYPE_NAMES))
    return enum_of(*JSON_TYPE_NAMES)


def dependency(value, key):
    """Dependencies map a property to either required siblings or a schema."""
    if isinstance(value, list):
        return STRING_LIST
    return "Schema"


Schema = NodeType(
    properties={
        "$id": STRING,
        "$schema": STRING,
        "$comment": STRING,
        "definitions": "SchemaProperties",
        "title": STRING,
        "description": STRING,
        "default": None,
        "readOnly": BOOLEAN,
        "writeOnly": BOOLEAN,
        "examples": LeafConstraint(type="array", is_example=True),
        "multipleOf": LeafConstraint(type="number", minimum=0),
        "maximum": NUMBER,
        "exclusiveMaximum": NUMBER,
        "minimum": NUMBER,
        "exclusiveMinimum": NUMBER,
        "maxLength": NON_NEGATIVE_INTEGER,
        "minLength": NON_NEGATIVE_INTEGER,
        "pattern": STRING,
        "additionalItems": schema_or_boolean,
        "items": schema_or_list,
        "maxItems": NON_NEGATIVE_INTEGER,
        "minItems": NON_NEGATIVE_INTEGER,
        "uniqueItems": BOOLEAN,
        "contains": "Schema",
        "maxProperties": NON_NEGATIVE_INTEGER,
        "minProperties": NON_NEGATIVE_INTEGER,
        "required": STRING_LIST,
        "additionalProperties": schema_or_boolean,
        "properties": "SchemaProperties",
        "patternProperties": "SchemaProperties",
        "dependencies": "Dependencies",
        "propertyNames": "Schema",
        "const": ANY,
        "enum": LeafConstraint(type="array"),
        "type": type_name_or_list,
        "format": STRING,
        "contentMediaType": STRING,
        "contentEncoding": STRING,
        "if": "Schema",
        "then": "Schema",
        "else": "Schema",
        "allOf": "SchemaList",
        "anyOf": "SchemaList",
        "oneOf": "SchemaList",
        "not": "Schema",
        "discriminator": "Discriminator",
        "externalDocs": "ExternalDocs",
        "deprecated": BOOLEAN,
        "example": EXAMPLE,
    },
    extensions_prefix="x-",
    description="JSON Schema draft-07 schema object.",
    documentation_link="https://json-schema.org/draft-07/json-schema-release-notes",
)

SchemaProperties = NodeType(properties={}, additional_properties="Schema")

Dependencies = NodeType(properties={}, additional_properties=dependency)

DiscriminatorMapping = NodeType(properties={}, additional_properties=classify_mapping_entry)

Discriminator = NodeType(
    properties={
        "propertyName": STRING,
        "mapping": "DiscriminatorMapping",
    },
    required=["propertyName"],
    extensions_prefix="x-",
)

JSON_SCHEMA_TYPES = {
    "Schema": Schema,
    "SchemaList": list_of("Schema"),
    "SchemaProperties": SchemaProperties,
    "Dependencies": Dependencies,
    "Discriminator": Discriminator,
    "DiscriminatorMapping": DiscriminatorMapping,
}
