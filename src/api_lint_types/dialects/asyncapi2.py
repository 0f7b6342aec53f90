"""AsyncAPI 2.x node types.

Schemas are JSON Schema draft-07 and come from the shared json_schema
table. The four *Bindings types start empty; protocol binding shapes are
attached later by asyncapi2_bindings.install_bindings().
"""

import re

from api_lint_types.dialects.common import (
    ANY,
    EXAMPLE,
    OBJECT,
    SCOPES,
    STRING,
    STRING_LIST,
    discriminant,
    enum_of,
)
from api_lint_types.model.base import NodeType
from api_lint_types.model.combinators import list_of, map_of

DOCS = "https://v2.asyncapi.com/docs/reference/specification/v2.6.0"

SERVER_NAME = re.compile(r"^[A-Za-z0-9_\-]+$")

# Every protocol the bindings objects accept, whether or not it has a
# detailed binding shape.
BINDING_PROTOCOLS = (
    "http",
    "ws",
    "kafka",
    "anypointmq",
    "amqp",
    "amqp1",
    "mqtt",
    "mqtt5",
    "nats",
    "jms",
    "sns",
    "solace",
    "sqs",
    "stomp",
    "redis",
    "mercure",
    "ibmmq",
    "googlepubsub",
    "pulsar",
)


def server_for_name(value, key):
    return "Server" if SERVER_NAME.match(str(key)) else None


def binding_protocols(value) -> list[str]:
    return list(BINDING_PROTOCOLS)


SECURITY_SCHEME_REQUIRED = {
    "apiKey": ["type", "in"],
    "httpApiKey": ["type", "name", "in"],
    "http": ["type", "scheme"],
    "oauth2": ["type", "flows"],
    "openIdConnect": ["type", "openIdConnectUrl"],
}

SECURITY_SCHEME_ALLOWED = {
    "apiKey": ["type", "in", "description"],
    "httpApiKey": ["type", "name", "in", "description"],
    "http": ["type", "scheme", "bearerFormat", "description"],
    "oauth2": ["type", "flows", "description"],
    "openIdConnect": ["type", "openIdConnectUrl", "description"],
}


def security_scheme_required(value) -> list[str]:
    return SECURITY_SCHEME_REQUIRED.get(discriminant(value, "type"), ["type"])


def security_scheme_allowed(value) -> list[str]:
    return SECURITY_SCHEME_ALLOWED.get(discriminant(value, "type"), ["type", "description"])


def _bindings(documentation_link: str) -> NodeType:
    return NodeType(
        properties={},
        allowed=binding_protocols,
        additional_properties=OBJECT,
        documentation_link=documentation_link,
    )


Root = NodeType(
    properties={
        "asyncapi": None,
        "info": "Info",
        "id": STRING,
        "servers": "ServerMap",
        "channels": "ChannelMap",
        "components": "Components",
        "tags": "TagList",
        "externalDocs": "ExternalDocs",
        "defaultContentType": STRING,
    },
    required=["asyncapi", "channels", "info"],
    documentation_link=f"{DOCS}#A2SObject",
)

Channel = NodeType(
    properties={
        "description": STRING,
        "subscribe": "Operation",
        "publish": "Operation",
        "parameters": "ParametersMap",
        "bindings": "ChannelBindings",
        "servers": STRING_LIST,
    },
    documentation_link=f"{DOCS}#channelItemObject",
)

ChannelMap = NodeType(properties={}, additional_properties="Channel")

ChannelBindings = _bindings(f"{DOCS}#channelBindingsObject")
ServerBindings = _bindings(f"{DOCS}#serverBindingsObject")
MessageBindings = _bindings(f"{DOCS}#messageBindingsObject")
OperationBindings = _bindings(f"{DOCS}#operationBindingsObject")

Tag = NodeType(
    properties={
        "name": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
    },
    required=["name"],
)

ExternalDocs = NodeType(
    properties={"description": STRING, "url": STRING},
    required=["url"],
    documentation_link=f"{DOCS}#externalDocumentationObject",
)

SecurityRequirement = NodeType(
    properties={},
    additional_properties=STRING_LIST,
    documentation_link=f"{DOCS}#securityRequirementObject",
)

Server = NodeType(
    properties={
        "url": STRING,
        "protocol": STRING,
        "protocolVersion": STRING,
        "description": STRING,
        "variables": "ServerVariablesMap",
        "security": "SecurityRequirementList",
        "bindings": "ServerBindings",
        "tags": "TagList",
    },
    required=["url", "protocol"],
    documentation_link=f"{DOCS}#serverObject",
)

ServerMap = NodeType(properties={}, additional_properties=server_for_name)

ServerVariable = NodeType(
    properties={
        "enum": STRING_LIST,
        "default": STRING,
        "description": STRING,
        "examples": STRING_LIST,
    },
    required=[],
    documentation_link=f"{DOCS}#serverVariableObject",
)

Info = NodeType(
    properties={
        "title": STRING,
        "version": STRING,
        "description": STRING,
        "termsOfService": STRING,
        "contact": "Contact",
        "license": "License",
    },
    required=["title", "version"],
    documentation_link=f"{DOCS}#infoObject",
)

Contact = NodeType(properties={"name": STRING, "url": STRING, "email": STRING})

License = NodeType(properties={"name": STRING, "url": STRING}, required=["name"])

Parameter = NodeType(
    properties={
        "description": STRING,
        "schema": "Schema",
        "location": STRING,
    },
    documentation_link=f"{DOCS}#parameterObject",
)

CorrelationId = NodeType(
    properties={"description": STRING, "location": STRING},
    required=["location"],
)

Message = NodeType(
    properties={
        "messageId": STRING,
        "headers": "Schema",
        "payload": "Schema",
        "correlationId": "CorrelationId",
        "schemaFormat": STRING,
        "contentType": STRING,
        "name": STRING,
        "title": STRING,
        "summary": STRING,
        "description": STRING,
        "tags": "TagList",
        "externalDocs": "ExternalDocs",
        "bindings": "MessageBindings",
        "examples": "MessageExampleList",
        "traits": "MessageTraitList",
    },
    additional_properties=ANY,
    documentation_link=f"{DOCS}#messageObject",
)

OperationTrait = NodeType(
    properties={
        "tags": "TagList",
        "summary": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
        "operationId": STRING,
        "security": "SecurityRequirementList",
        "bindings": "OperationBindings",
    },
    required=[],
    documentation_link=f"{DOCS}#operationTraitObject",
)

MessageTrait = NodeType(
    properties={
        "messageId": STRING,
        "headers": "Schema",
        "correlationId": "CorrelationId",
        "schemaFormat": STRING,
        "contentType": STRING,
        "name": STRING,
        "title": STRING,
        "summary": STRING,
        "description": STRING,
        "tags": "TagList",
        "externalDocs": "ExternalDocs",
        "bindings": "MessageBindings",
        "examples": "MessageExampleList",
    },
    additional_properties=ANY,
    documentation_link=f"{DOCS}#messageTraitObject",
)

Operation = NodeType(
    properties={
        "tags": "TagList",
        "summary": STRING,
        "description": STRING,
        "externalDocs": "ExternalDocs",
        "operationId": STRING,
        "security": "SecurityRequirementList",
        "bindings": "OperationBindings",
        "traits": "OperationTraitList",
        "message": "Message",
    },
    required=[],
    documentation_link=f"{DOCS}#operationObject",
)

MessageExample = NodeType(
    properties={
        "payload": EXAMPLE,
        "summary": STRING,
        "name": STRING,
        "headers": OBJECT,
    },
    documentation_link=f"{DOCS}#messageExampleObject",
)

Components = NodeType(
    properties={
        "messages": "NamedMessages",
        "parameters": "NamedParameters",
        "schemas": "NamedSchemas",
        "correlationIds": "NamedCorrelationIds",
        "messageTraits": "NamedMessageTraits",
        "operationTraits": "NamedOperationTraits",
        "securitySchemes": "NamedSecuritySchemes",
        "servers": "ServerMap",
        "serverVariables": "ServerVariablesMap",
        "channels": "ChannelMap",
        "serverBindings": "ServerBindings",
        "channelBindings": "ChannelBindings",
        "operationBindings": "OperationBindings",
        "messageBindings": "MessageBindings",
    },
    documentation_link=f"{DOCS}#componentsObject",
)

ImplicitFlow = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "authorizationUrl": STRING},
    required=["authorizationUrl", "scopes"],
)

PasswordFlow = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "tokenUrl": STRING},
    required=["tokenUrl", "scopes"],
)

ClientCredentials = NodeType(
    properties={"refreshUrl": STRING, "scopes": SCOPES, "tokenUrl": STRING},
    required=["tokenUrl", "scopes"],
)

AuthorizationCode = NodeType(
    properties={
        "refreshUrl": STRING,
        "authorizationUrl": STRING,
        "scopes": SCOPES,
        "tokenUrl": STRING,
    },
    required=["authorizationUrl", "tokenUrl", "scopes"],
)

SecuritySchemeFlows = NodeType(
    properties={
        "implicit": "ImplicitFlow",
        "password": "PasswordFlow",
        "clientCredentials": "ClientCredentials",
        "authorizationCode": "AuthorizationCode",
    },
)

SecurityScheme = NodeType(
    properties={
        "type": enum_of(
            "userPassword",
            "apiKey",
            "X509",
            "symmetricEncryption",
            "asymmetricEncryption",
            "httpApiKey",
            "http",
            "oauth2",
            "openIdConnect",
            "plain",
            "scramSha256",
            "scramSha512",
            "gssapi",
        ),
        "description": STRING,
        "name": STRING,
        "in": enum_of("query", "header", "cookie", "user", "password", type="string"),
        "scheme": STRING,
        "bearerFormat": STRING,
        "flows": "SecuritySchemeFlows",
        "openIdConnectUrl": STRING,
    },
    required=security_scheme_required,
    allowed=security_scheme_allowed,
    extensions_prefix="x-",
    documentation_link=f"{DOCS}#securitySchemeObject",
)

ASYNCAPI2_TYPES = {
    "Root": Root,
    "Tag": Tag,
    "TagList": list_of("Tag"),
    "ServerMap": ServerMap,
    "ExternalDocs": ExternalDocs,
    "Server": Server,
    "ServerVariable": ServerVariable,
    "ServerVariablesMap": map_of("ServerVariable"),
    "SecurityRequirement": SecurityRequirement,
    "SecurityRequirementList": list_of("SecurityRequirement"),
    "Info": Info,
    "Contact": Contact,
    "License": License,
    "ChannelMap": ChannelMap,
    "Channel": Channel,
    "Parameter": Parameter,
    "ParametersMap": map_of("Parameter"),
    "Operation": Operation,
    "MessageExample": MessageExample,
    "Components": Components,
    "NamedSchemas": map_of("Schema"),
    "NamedMessages": map_of("Message"),
    "NamedMessageTraits": map_of("MessageTrait"),
    "NamedOperationTraits": map_of("OperationTrait"),
    "NamedParameters": map_of("Parameter"),
    "NamedSecuritySchemes": map_of("SecurityScheme"),
    "NamedCorrelationIds": map_of("CorrelationId"),
    "ImplicitFlow": ImplicitFlow,
    "PasswordFlow": PasswordFlow,
    "ClientCredentials": ClientCredentials,
    "AuthorizationCode": AuthorizationCode,
    "SecuritySchemeFlows": SecuritySchemeFlows,
    "SecurityScheme": SecurityScheme,
    "Message": Message,
    "ServerBindings": ServerBindings,
    "ChannelBindings": ChannelBindings,
    "MessageBindings": MessageBindings,
    "OperationBindings": OperationBindings,
    "OperationTrait": OperationTrait,
    "OperationTraitList": list_of("OperationTrait"),
    "MessageTrait": MessageTrait,
    "MessageTraitList": list_of("MessageTrait"),
    "MessageExampleList": list_of("MessageExample"),
    "CorrelationId": CorrelationId,
}
