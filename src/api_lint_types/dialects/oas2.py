"""OpenAPI 2.0 (Swagger) node types."""

import re

from api_lint_types.dialects.common import (
    BOOLEAN,
    EXAMPLE,
    INTEGER,
    NON_NEGATIVE_INTEGER,
    NUMBER,
    SCOPES,
    STRING,
    STRING_LIST,
    discriminant,
    enum_of,
    string,
)
from api_lint_types.dialects.json_schema import schema_or_boolean, schema_or_list
from api_lint_types.model.base import LeafConstraint, NodeType
from api_lint_types.model.combinators import list_of, map_of

RESPONSE_CODE = re.compile(r"^[0-9][0-9Xx]{2}$")

COLLECTION_FORMATS = ("csv", "ssv", "tsv", "pipes", "multi")
ITEM_TYPES = ("string", "number", "integer", "boolean", "array")


def path_item_for_path(value, key):
    return "PathItem" if str(key).startswith("/") else None


def response_for_code(value, key):
    return "Response" if RESPONSE_CODE.match(str(key)) else None


def _parameter_location(value):
    return discriminant(value, "in")


def parameter_required(value) -> list[str]:
    location = _parameter_location(value)
    if location == "body":
        return ["name", "in", "schema"]
    if location == "path":
        return ["name", "in", "type", "required"]
    if location in ("query", "header", "formData"):
        if discriminant(value, "type") == "array":
            return ["name", "in", "type", "items"]
        return ["name", "in", "type"]
    return ["name", "in"]


SECURITY_SCHEME_REQUIRED = {
    "basic": ["type"],
    "apiKey": ["type", "name", "in"],
}

SECURITY_SCHEME_ALLOWED = {
    "basic": ["type", "description"],
    "apiKey": ["type", "name", "in", "description"],
}

OAUTH2_FLOW_FIELDS = {
    "implicit": ["authorizationUrl"],
    "password": ["tokenUrl"],
    "application": ["tokenUrl"],
    "accessCode": ["authorizationUrl", "tokenUrl"],
}


def security_scheme_required(value) -> list[str]:
    """Mandatory fields depend on `type` and, for oauth2, on `flow`."""
    scheme_type = discriminant(value, "type")
    if scheme_type == "oauth2":
        flow = discriminant(value, "flow")
        return ["type", "flow", "scopes"] + OAUTH2_FLOW_FIELDS.get(flow, [])
    return SECURITY_SCHEME_REQUIRED.get(scheme_type, ["type"])


def security_scheme_allowed(value) -> list[str]:
    scheme_type = discriminant(value, "type")
    if scheme_type == "oauth2":
        flow = discriminant(value, "flow")
        fields = OAUTH2_FLOW_FIELDS.get(flow, ["authorizationUrl", "tokenUrl"])
        return ["type", "flow", "scopes", "description"] + fields
    return SECURITY_SCHEME_ALLOWED.get(scheme_type, ["type", "description"])


Root = NodeType(
    properties={
        "swagger": None,
        "info": "Info",
        "host": STRING,
        "basePath": STRING,
        "schemes": LeafConstraint(type="array", items=enum_of("http", "https", "ws", "wss")),
        "consumes": STRING_LIST,
        "produces": STRING_LIST,
        "paths": "Paths",
        "definitions": "NamedSchemas",
        "parameters": "NamedParameters",
        "responses": "NamedResponses",
        "securityDefinitions": "NamedSecuritySchemes",
        "security": "SecurityRequirementList",
        "tags": "TagList",
        "externalDocs": "ExternalDocs",
        "x-servers": "XServerList",
        "x-tagGroups": "TagGroups",
    },
    required=["swagger", "paths", "info"],
    extensions_prefix="x-",
    documentation_link="https://swagger.io/specification/v2/#swagger-object",
)

Info = NodeType(
    properties={
        "title": string("REQUIRED. The title of the application."),
        "description": STRING,
        "termsOfService": STRING,
        "contact": "Contact",
        "license": "License",
        "version": string("REQUIRED. Provides the version of the application API."),
        "x-logo": "Logo",
    },
    required=["title", "version"],
    extensions_prefix="x-",
)

Logo = NodeType(
    properties={"url": STRING, "altText": STRING, "backgroundColor": STRING, "href": STRING},
)

Contact = NodeType(
    properties={"name": STRING, "url": STRING, "email": STRING},
    extensions_prefix="x-",
)

License = NodeType(
    properties={"name": STRING, "url": STRING},
    required=["name"],
    extensions_prefix="x-",
)

Paths = NodeType(properties={}, additional_properties=path_item_for_path)

PathItem = NodeType(
    properties={
        "$ref": STRING,
        "get": "Operation",
        "put": "Operation",
        "post": "Operation",
        "delete": "Operation",
        "options": "Operation",
        "head": "Operation",
        "patch": "Operation",
        "parameters": "ParameterList",
    },
    extensions_prefix="x-",
)

Operation = NodeType(
    properties={
        "tags": STRING_LIST,
        "summary": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
        "operationId": STRING,
        "consumes": STRING_LIST,
        "produces": STRING_LIST,
        "parameters": "ParameterList",
        "responses": "Responses",
        "schemes": LeafConstraint(type="array", items=enum_of("http", "https", "ws", "wss")),
        "deprecated": BOOLEAN,
        "security": "SecurityRequirementList",
        "x-codeSamples": "XCodeSampleList",
        "x-code-samples": "XCodeSampleList",
        "x-hideTryItPanel": BOOLEAN,
    },
    required=["responses"],
    extensions_prefix="x-",
)

XCodeSample = NodeType(properties={"lang": STRING, "label": STRING, "source": STRING})

XServer = NodeType(
    properties={"url": STRING, "description": STRING},
    required=["url"],
)

Parameter = NodeType(
    properties={
        "name": STRING,
        "in": enum_of("query", "header", "path", "formData", "body"),
        "description": STRING,
        "required": BOOLEAN,
        "schema": "Schema",
        "type": enum_of("string", "number", "integer", "boolean", "array", "file"),
        "format": STRING,
        "allowEmptyValue": BOOLEAN,
        "items": "ParameterItems",
        "collectionFormat": enum_of(*COLLECTION_FORMATS),
        "default": None,
        "maximum": INTEGER,
        "exclusiveMaximum": BOOLEAN,
        "minimum": INTEGER,
        "exclusiveMinimum": BOOLEAN,
        "maxLength": NON_NEGATIVE_INTEGER,
        "minLength": NON_NEGATIVE_INTEGER,
        "pattern": STRING,
        "maxItems": NON_NEGATIVE_INTEGER,
        "minItems": NON_NEGATIVE_INTEGER,
        "uniqueItems": BOOLEAN,
        "enum": LeafConstraint(type="array"),
        "multipleOf": NUMBER,
        "x-example": EXAMPLE,
        "x-examples": "Examples",
    },
    required=parameter_required,
    extensions_prefix="x-",
    documentation_link="https://swagger.io/specification/v2/#parameter-object",
)

ParameterItems = NodeType(
    properties={
        "type": enum_of(*ITEM_TYPES),
        "format": STRING,
        "items": "ParameterItems",
        "collectionFormat": enum_of(*COLLECTION_FORMATS),
        "default": None,
        "maximum": INTEGER,
        "exclusiveMaximum": BOOLEAN,
        "minimum": INTEGER,
        "exclusiveMinimum": BOOLEAN,
        "maxLength": NON_NEGATIVE_INTEGER,
        "minLength": NON_NEGATIVE_INTEGER,
        "pattern": STRING,
        "maxItems": NON_NEGATIVE_INTEGER,
        "minItems": NON_NEGATIVE_INTEGER,
        "uniqueItems": BOOLEAN,
        "enum": LeafConstraint(type="array"),
        "multipleOf": NUMBER,
    },
    required=lambda value: ["type", "items"] if discriminant(value, "type") == "array" else ["type"],
    extensions_prefix="x-",
)

Responses = NodeType(
    properties={"default": "Response"},
    additional_properties=response_for_code,
)

Response = NodeType(
    properties={
        "description": STRING,
        "schema": "Schema",
        "headers": "ResponseHeaders",
        "examples": "Examples",
        "x-summary": STRING,
    },
    required=["description"],
    extensions_prefix="x-",
)

Examples = NodeType(properties={}, additional_properties=EXAMPLE)

ResponseHeaders = NodeType(properties={}, additional_properties="Header")

Header = NodeType(
    properties={
        "description": STRING,
        "type": enum_of(*ITEM_TYPES),
        "format": STRING,
        "items": "ParameterItems",
        "collectionFormat": enum_of(*COLLECTION_FORMATS),
        "default": None,
        "maximum": INTEGER,
        "exclusiveMaximum": BOOLEAN,
        "minimum": INTEGER,
        "exclusiveMinimum": BOOLEAN,
        "maxLength": NON_NEGATIVE_INTEGER,
        "minLength": NON_NEGATIVE_INTEGER,
        "pattern": STRING,
        "maxItems": NON_NEGATIVE_INTEGER,
        "minItems": NON_NEGATIVE_INTEGER,
        "uniqueItems": BOOLEAN,
        "enum": LeafConstraint(type="array"),
        "multipleOf": NUMBER,
    },
    required=lambda value: ["type", "items"] if discriminant(value, "type") == "array" else ["type"],
    extensions_prefix="x-",
)

Tag = NodeType(
    properties={
        "name": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
        "x-traitTag": BOOLEAN,
        "x-displayName": STRING,
    },
    required=["name"],
    extensions_prefix="x-",
)

TagGroup = NodeType(
    properties={"name": STRING, "tags": STRING_LIST},
    extensions_prefix="x-",
)

ExternalDocs = NodeType(
    properties={"description": STRING, "url": STRING},
    required=["url"],
    extensions_prefix="x-",
)

SecurityRequirement = NodeType(properties={}, additional_properties=STRING_LIST)

Schema = NodeType(
    properties={
        "format": STRING,
        "title": STRING,
        "description": STRING,
        "default": None,
        "multipleOf": LeafConstraint(type="number", minimum=0),
        "maximum": NUMBER,
        "minimum": NUMBER,
        "exclusiveMaximum": BOOLEAN,
        "exclusiveMinimum": BOOLEAN,
        "maxLength": NON_NEGATIVE_INTEGER,
        "minLength": NON_NEGATIVE_INTEGER,
        "pattern": STRING,
        "maxItems": NON_NEGATIVE_INTEGER,
        "minItems": NON_NEGATIVE_INTEGER,
        "uniqueItems": BOOLEAN,
        "maxProperties": NON_NEGATIVE_INTEGER,
        "minProperties": NON_NEGATIVE_INTEGER,
        "required": STRING_LIST,
        "enum": LeafConstraint(type="array"),
        "type": enum_of("object", "array", "string", "number", "integer", "boolean", "null"),
        "items": schema_or_list,
        "allOf": "SchemaList",
        "properties": "SchemaProperties",
        "additionalProperties": schema_or_boolean,
        # Swagger 2.0 discriminators are the name of a property, not an object.
        "discriminator": STRING,
        "readOnly": BOOLEAN,
        "xml": "Xml",
        "externalDocs": "ExternalDocs",
        "example": EXAMPLE,
        "x-tags": STRING_LIST,
        "x-nullable": BOOLEAN,
        "x-extendedDiscriminator": STRING,
        "x-additionalPropertiesName": STRING,
        "x-explicitMappingOnly": BOOLEAN,
    },
    extensions_prefix="x-",
    documentation_link="https://swagger.io/specification/v2/#schema-object",
)

Xml = NodeType(
    properties={
        "name": STRING,
        "namespace": STRING,
        "prefix": STRING,
        "attribute": BOOLEAN,
        "wrapped": BOOLEAN,
    },
    extensions_prefix="x-",
)

SchemaProperties = NodeType(properties={}, additional_properties="Schema")

SecurityScheme = NodeType(
    properties={
        "type": enum_of("basic", "apiKey", "oauth2"),
        "description": STRING,
        "name": STRING,
        "in": enum_of("query", "header", type="string"),
        "flow": enum_of("implicit", "password", "application", "accessCode"),
        "authorizationUrl": STRING,
        "tokenUrl": STRING,
        "scopes": SCOPES,
        "x-defaultClientId": STRING,
    },
    required=security_scheme_required,
    allowed=security_scheme_allowed,
    extensions_prefix="x-",
)

OAS2_TYPES = {
    "Root": Root,
    "Tag": Tag,
    "TagList": list_of("Tag"),
    "TagGroups": list_of("TagGroup"),
    "TagGroup": TagGroup,
    "ExternalDocs": ExternalDocs,
    "Info": Info,
    "Logo": Logo,
    "Contact": Contact,
    "License": License,
    "Paths": Paths,
    "PathItem": PathItem,
    "Parameter": Parameter,
    "ParameterItems": ParameterItems,
    "ParameterList": list_of("Parameter"),
    "Operation": Operation,
    "XCodeSample": XCodeSample,
    "XCodeSampleList": list_of("XCodeSample"),
    "XServer": XServer,
    "XServerList": list_of("XServer"),
    "Responses": Responses,
    "Response": Response,
    "ResponseHeaders": ResponseHeaders,
    "Header": Header,
    "Examples": Examples,
    "Schema": Schema,
    "SchemaList": list_of("Schema"),
    "Xml": Xml,
    "SchemaProperties": SchemaProperties,
    "NamedSchemas": map_of("Schema"),
    "NamedResponses": map_of("Response"),
    "NamedParameters": map_of("Parameter"),
    "NamedSecuritySchemes": map_of("SecurityScheme"),
    "SecurityScheme": SecurityScheme,
    "SecurityRequirement": SecurityRequirement,
    "SecurityRequirementList": list_of("SecurityRequirement"),
}
