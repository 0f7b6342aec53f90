"""OpenAPI 3.0 node types."""

import re

from api_lint_types.dialects.common import (
    BOOLEAN,
    EXAMPLE,
    NON_NEGATIVE_INTEGER,
    NOT_RESOLVABLE,
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
from api_lint_types.model.refs import classify_mapping_entry

DOCS = "https://redocly.com/learn/openapi/openapi-visual-reference"

RESPONSE_CODE = re.compile(r"^[0-9][0-9Xx]{2}$")

PARAMETER_STYLES = ("form", "simple", "label", "matrix", "spaceDelimited", "pipeDelimited", "deepObject")


def path_item_for_path(value, key):
    return "PathItem" if str(key).startswith("/") else None


def response_for_code(value, key):
    return "Response" if RESPONSE_CODE.match(str(key)) else None


def pkce_flag_or_options(value, key):
    if isinstance(value, bool):
        return BOOLEAN
    return "XUsePkce"


SECURITY_SCHEME_REQUIRED = {
    "apiKey": ["type", "name", "in"],
    "http": ["type", "scheme"],
    "oauth2": ["type", "flows"],
    "openIdConnect": ["type", "openIdConnectUrl"],
}

SECURITY_SCHEME_ALLOWED = {
    "apiKey": ["type", "name", "in", "description"],
    "http": ["type", "scheme", "bearerFormat", "description"],
    "oauth2": ["type", "flows", "description"],
    "openIdConnect": ["type", "openIdConnectUrl", "description"],
}


def security_scheme_required(value) -> list[str]:
    """Mandatory fields depend on the declared scheme `type`."""
    return SECURITY_SCHEME_REQUIRED.get(discriminant(value, "type"), ["type"])


def security_scheme_allowed(value) -> list[str]:
    return SECURITY_SCHEME_ALLOWED.get(discriminant(value, "type"), ["type", "description"])


Root = NodeType(
    properties={
        "openapi": None,
        "info": "Info",
        "servers": "ServerList",
        "security": "SecurityRequirementList",
        "tags": "TagList",
        "externalDocs": "ExternalDocs",
        "paths": "Paths",
        "components": "Components",
        "x-webhooks": "WebhooksMap",
        "x-tagGroups": "TagGroups",
        "x-ignoredHeaderParameters": STRING_LIST,
    },
    required=["openapi", "paths", "info"],
    extensions_prefix="x-",
    description="The root object of an OpenAPI 3.0 document.",
    documentation_link=f"{DOCS}/openapi#openapi",
)

Tag = NodeType(
    properties={
        "name": string("REQUIRED. The name of the tag."),
        "description": string("A description for the tag."),
        "externalDocs": "ExternalDocs",
        "x-traitTag": BOOLEAN,
        "x-displayName": STRING,
    },
    required=["name"],
    extensions_prefix="x-",
    documentation_link="https://spec.openapis.org/oas/v3.1.0#tag-object",
)

TagGroup = NodeType(
    properties={"name": STRING, "tags": STRING_LIST},
    extensions_prefix="x-",
)

ExternalDocs = NodeType(
    properties={
        "description": STRING,
        "url": string("REQUIRED. The URL for the target documentation."),
    },
    required=["url"],
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/external-docs",
)

Server = NodeType(
    properties={
        "url": string("REQUIRED. A URL to the target host."),
        "description": STRING,
        "variables": "ServerVariablesMap",
    },
    required=["url"],
    extensions_prefix="x-",
)

ServerVariable = NodeType(
    properties={
        "enum": STRING_LIST,
        "default": string("REQUIRED. The default value to use for substitution."),
        "description": STRING,
    },
    required=["default"],
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/server-variables#server-variables",
)

SecurityRequirement = NodeType(
    properties={},
    additional_properties=STRING_LIST,
    documentation_link=f"{DOCS}/security",
)

Info = NodeType(
    properties={
        "title": string("REQUIRED. The title of the API."),
        "version": string("REQUIRED. The version of the OpenAPI document."),
        "description": STRING,
        "termsOfService": STRING,
        "contact": "Contact",
        "license": "License",
        "x-logo": "Logo",
    },
    required=["title", "version"],
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/info#info",
)

Logo = NodeType(
    properties={
        "url": STRING,
        "altText": STRING,
        "backgroundColor": STRING,
        "href": STRING,
    },
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

Paths = NodeType(
    properties={},
    additional_properties=path_item_for_path,
    description="The Paths Object is a map of a paths to the path item object. A path starts with a /.",
)

WebhooksMap = NodeType(properties={}, additional_properties="PathItem")

PathItem = NodeType(
    properties={
        "$ref": STRING,
        "servers": "ServerList",
        "parameters": "ParameterList",
        "summary": STRING,
        "description": STRING,
        "get": "Operation",
        "put": "Operation",
        "post": "Operation",
        "delete": "Operation",
        "options": "Operation",
        "head": "Operation",
        "patch": "Operation",
        "trace": "Operation",
    },
    extensions_prefix="x-",
)

Parameter = NodeType(
    properties={
        "name": STRING,
        "in": enum_of("query", "header", "path", "cookie"),
        "description": STRING,
        "required": BOOLEAN,
        "deprecated": BOOLEAN,
        "allowEmptyValue": BOOLEAN,
        "style": enum_of(*PARAMETER_STYLES),
        "explode": BOOLEAN,
        "allowReserved": BOOLEAN,
        "schema": "Schema",
        "example": EXAMPLE,
        "examples": "ExamplesMap",
        "content": "MediaTypesMap",
    },
    required=["name", "in"],
    required_one_of=["schema", "content"],
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/parameter",
)

Operation = NodeType(
    properties={
        "tags": STRING_LIST,
        "summary": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
        "operationId": STRING,
        "parameters": "ParameterList",
        "security": "SecurityRequirementList",
        "servers": "ServerList",
        "requestBody": "RequestBody",
        "responses": "Responses",
        "deprecated": BOOLEAN,
        "callbacks": "CallbacksMap",
        "x-codeSamples": "XCodeSampleList",
        "x-code-samples": "XCodeSampleList",
        "x-hideTryItPanel": BOOLEAN,
    },
    required=["responses"],
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/operation",
)

XCodeSample = NodeType(properties={"lang": STRING, "label": STRING, "source": STRING})

RequestBody = NodeType(
    properties={
        "description": STRING,
        "required": BOOLEAN,
        "content": "MediaTypesMap",
    },
    required=["content"],
    extensions_prefix="x-",
)

MediaTypesMap = NodeType(properties={}, additional_properties="MediaType")

MediaType = NodeType(
    properties={
        "schema": "Schema",
        "example": EXAMPLE,
        "examples": "ExamplesMap",
        "encoding": "EncodingMap",
    },
    extensions_prefix="x-",
)

Example = NodeType(
    properties={
        "value": NOT_RESOLVABLE,
        "summary": STRING,
        "description": STRING,
        "externalValue": STRING,
    },
    extensions_prefix="x-",
)

Encoding = NodeType(
    properties={
        "contentType": STRING,
        "headers": "HeadersMap",
        "style": enum_of(*PARAMETER_STYLES),
        "explode": BOOLEAN,
        "allowReserved": BOOLEAN,
    },
    extensions_prefix="x-",
)

EnumDescriptions = NodeType(properties={}, additional_properties=STRING)

Header = NodeType(
    properties={
        "description": STRING,
        "required": BOOLEAN,
        "deprecated": BOOLEAN,
        "allowEmptyValue": BOOLEAN,
        "style": enum_of(*PARAMETER_STYLES),
        "explode": BOOLEAN,
        "allowReserved": BOOLEAN,
        "schema": "Schema",
        "example": EXAMPLE,
        "examples": "ExamplesMap",
        "content": "MediaTypesMap",
    },
    required_one_of=["schema", "content"],
    extensions_prefix="x-",
)

Responses = NodeType(
    properties={"default": "Response"},
    additional_properties=response_for_code,
)

Response = NodeType(
    properties={
        "description": STRING,
        "headers": "HeadersMap",
        "content": "MediaTypesMap",
        "links": "LinksMap",
        "x-summary": STRING,
    },
    required=["description"],
    extensions_prefix="x-",
)

Link = NodeType(
    properties={
        "operationRef": STRING,
        "operationId": STRING,
        "parameters": None,
        "requestBody": None,
        "description": STRING,
        "server": "Server",
    },
    extensions_prefix="x-",
)

Schema = NodeType(
    properties={
        "externalDocs": "ExternalDocs",
        "discriminator": "Discriminator",
        "description": STRING,
        "title": STRING,
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
        "type": enum_of("object", "array", "string", "number", "integer", "boolean"),
        "allOf": "SchemaList",
        "anyOf": "SchemaList",
        "oneOf": "SchemaList",
        "not": "Schema",
        "properties": "SchemaProperties",
        "items": schema_or_list,
        "additionalProperties": schema_or_boolean,
        "format": STRING,
        "default": None,
        "nullable": BOOLEAN,
        "readOnly": BOOLEAN,
        "writeOnly": BOOLEAN,
        "xml": "Xml",
        "example": EXAMPLE,
        "deprecated": BOOLEAN,
        "x-tags": STRING_LIST,
        "x-additionalPropertiesName": STRING,
        "x-explicitMappingOnly": BOOLEAN,
        "x-enumDescriptions": "EnumDescriptions",
    },
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/schemas",
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

DiscriminatorMapping = NodeType(properties={}, additional_properties=classify_mapping_entry)

Discriminator = NodeType(
    properties={
        "propertyName": STRING,
        "mapping": "DiscriminatorMapping",
    },
    required=["propertyName"],
    extensions_prefix="x-",
)

Components = NodeType(
    properties={
        "parameters": "NamedParameters",
        "schemas": "NamedSchemas",
        "responses": "NamedResponses",
        "examples": "NamedExamples",
        "requestBodies": "NamedRequestBodies",
        "headers": "NamedHeaders",
        "securitySchemes": "NamedSecuritySchemes",
        "links": "NamedLinks",
        "callbacks": "NamedCallbacks",
    },
    extensions_prefix="x-",
)

ImplicitFlow = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "authorizationUrl": STRING},
    required=["authorizationUrl", "scopes"],
    extensions_prefix="x-",
)

PasswordFlow = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "tokenUrl": STRING},
    required=["tokenUrl", "scopes"],
    extensions_prefix="x-",
)

ClientCredentials = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "tokenUrl": STRING},
    required=["tokenUrl", "scopes"],
    extensions_prefix="x-",
)

AuthorizationCode = NodeType(
    properties={
        "refreshUrl": STRING,
        "authorizationUrl": STRING,
        "scopes": SCOPES,
        "tokenUrl": STRING,
        "x-usePkce": pkce_flag_or_options,
    },
    required=["authorizationUrl", "tokenUrl", "scopes"],
    extensions_prefix="x-",
)

OAuth2Flows = NodeType(
    properties={
        "implicit": "ImplicitFlow",
        "password": "PasswordFlow",
        "clientCredentials": "ClientCredentials",
        "authorizationCode": "AuthorizationCode",
    },
    extensions_prefix="x-",
)

SecurityScheme = NodeType(
    properties={
        "type": enum_of("apiKey", "http", "oauth2", "openIdConnect"),
        "description": STRING,
        "name": STRING,
        "in": enum_of("query", "header", "cookie", type="string"),
        "scheme": STRING,
        "bearerFormat": STRING,
        "flows": "OAuth2Flows",
        "openIdConnectUrl": STRING,
        "x-defaultClientId": STRING,
    },
    required=security_scheme_required,
    allowed=security_scheme_allowed,
    extensions_prefix="x-",
    documentation_link=f"{DOCS}/security-schemes",
)

XUsePkce = NodeType(
    properties={
        "disableManualConfiguration": BOOLEAN,
        "hideClientSecretInput": BOOLEAN,
    },
)

OAS3_TYPES = {
    "Root": Root,
    "Tag": Tag,
    "TagList": list_of("Tag", documentation_link=f"{DOCS}/tags"),
    "TagGroups": list_of("TagGroup"),
    "TagGroup": TagGroup,
    "ExternalDocs": ExternalDocs,
    "Server": Server,
    "ServerList": list_of("Server", documentation_link=f"{DOCS}/servers#servers"),
    "ServerVariable": ServerVariable,
    "ServerVariablesMap": map_of("ServerVariable"),
    "SecurityRequirement": SecurityRequirement,
    "SecurityRequirementList": list_of("SecurityRequirement"),
    "Info": Info,
    "Contact": Contact,
    "License": License,
    "Paths": Paths,
    "PathItem": PathItem,
    "Parameter": Parameter,
    "ParameterList": list_of("Parameter", description="A list of parameters that are applicable for this operation."),
    "Operation": Operation,
    "Callback": map_of("PathItem"),
    "CallbacksMap": map_of("Callback"),
    "RequestBody": RequestBody,
    "MediaTypesMap": MediaTypesMap,
    "MediaType": MediaType,
    "Example": Example,
    "ExamplesMap": map_of("Example"),
    "Encoding": Encoding,
    "EncodingMap": map_of("Encoding"),
    "EnumDescriptions": EnumDescriptions,
    "Header": Header,
    "HeadersMap": map_of("Header"),
    "Responses": Responses,
    "Response": Response,
    "Link": Link,
    "Logo": Logo,
    "Schema": Schema,
    "SchemaList": list_of("Schema"),
    "Xml": Xml,
    "SchemaProperties": SchemaProperties,
    "DiscriminatorMapping": DiscriminatorMapping,
    "Discriminator": Discriminator,
    "Components": Components,
    "LinksMap": map_of("Link"),
    "NamedSchemas": map_of("Schema"),
    "NamedResponses": map_of("Response"),
    "NamedParameters": map_of("Parameter"),
    "NamedExamples": map_of("Example"),
    "NamedRequestBodies": map_of("RequestBody"),
    "NamedHeaders": map_of("Header"),
    "NamedSecuritySchemes": map_of("SecurityScheme"),
    "NamedLinks": map_of("Link"),
    "NamedCallbacks": map_of("Callback"),
    "ImplicitFlow": ImplicitFlow,
    "PasswordFlow": PasswordFlow,
    "ClientCredentials": ClientCredentials,
    "AuthorizationCode": AuthorizationCode,
    "OAuth2Flows": OAuth2Flows,
    "SecurityScheme": SecurityScheme,
    "XCodeSample": XCodeSample,
    "XCodeSampleList": list_of("XCodeSample"),
    "XUsePkce": XUsePkce,
    "WebhooksMap": WebhooksMap,
}
