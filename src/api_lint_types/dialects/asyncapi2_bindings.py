"""Per-protocol AsyncAPI 2 binding shapes.

Each protocol contributes up to four binding types (server, channel,
operation, message). They are registered under their own names and then
patched into the shared *Bindings descriptors with TypeRegistry.extend().
Protocols without an entry here (sns, sqs, ibmmq, googlepubsub, pulsar) are
still allowed and validated only as plain objects.
"""

import logging

from api_lint_types.dialects.common import BOOLEAN, INTEGER, STRING, STRING_LIST, enum_of
from api_lint_types.model.base import LeafConstraint, NodeType
from api_lint_types.model.combinators import list_of
from api_lint_types.model.registry import TypeRegistry

logger = logging.getLogger(__name__)

BINDING_KINDS = {
    "Server": "ServerBindings",
    "Channel": "ChannelBindings",
    "Operation": "OperationBindings",
    "Message": "MessageBindings",
}


def _empty() -> NodeType:
    return NodeType(properties={})


def _versioned(**properties) -> NodeType:
    return NodeType(properties={**properties, "bindingVersion": STRING})


# protocol -> {binding kind -> shape}; kinds left out are empty objects
PROTOCOL_BINDINGS: dict[str, dict[str, NodeType]] = {
    "http": {
        "Message": _versioned(headers="Schema"),
        "Operation": _versioned(
            type=STRING,
            method=enum_of("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "CONNECT", "TRACE", type="string"),
            headers="Schema",
        ),
    },
    "ws": {
        "Channel": _versioned(method=STRING, query="Schema", headers="Schema"),
    },
    "kafka": {
        "Channel": _versioned(
            topic=STRING,
            partitions=INTEGER,
            replicas=INTEGER,
            topicConfiguration="KafkaTopicConfiguration",
        ),
        "Message": _versioned(
            key="Schema",
            schemaIdLocation=STRING,
            schemaIdPayloadEncoding=STRING,
            schemaLookupStrategy=STRING,
        ),
        "Operation": _versioned(groupId="Schema", clientId="Schema"),
    },
    "anypointmq": {
        "Channel": _versioned(destination=STRING, destinationType=STRING),
        "Message": _versioned(headers="Schema"),
    },
    "amqp": {
        "Message": _versioned(contentEncoding=STRING, messageType=STRING),
        "Operation": _versioned(
            expiration=INTEGER,
            userId=STRING,
            cc=STRING_LIST,
            priority=INTEGER,
            deliveryMode=enum_of(1, 2, type="integer"),
            mandatory=BOOLEAN,
            bcc=STRING_LIST,
            replyTo=STRING,
            timestamp=BOOLEAN,
            ack=BOOLEAN,
        ),
    },
    "amqp1": {},
    "mqtt": {
        "Server": _versioned(
            clientId=STRING,
            cleanSession=BOOLEAN,
            lastWill="MqttServerBindingLastWill",
            keepAlive=INTEGER,
        ),
        "Channel": _versioned(qos=INTEGER, retain=BOOLEAN),
        "Message": _versioned(),
        "Operation": _versioned(qos=INTEGER, retain=BOOLEAN),
    },
    "mqtt5": {},
    "nats": {
        "Operation": _versioned(queue=STRING),
    },
    "jms": {
        "Channel": _versioned(destination=STRING, destinationType=STRING),
        "Message": _versioned(headers="Schema"),
        "Operation": _versioned(headers="Schema"),
    },
    "solace": {
        "Server": _versioned(msgVpn=STRING),
        "Operation": _versioned(destinations="SolaceDestinationList"),
    },
    "stomp": {},
    "redis": {},
    "mercure": {},
}

# Helper shapes referenced from the binding tables above.
BINDING_SUPPORT_TYPES: dict[str, NodeType] = {
    "KafkaTopicConfiguration": NodeType(
        properties={
            "cleanup.policy": LeafConstraint(type="array", items=enum_of("delete", "compact")),
            "retention.ms": INTEGER,
            "retention.bytes": INTEGER,
            "delete.retention.ms": INTEGER,
            "max.message.bytes": INTEGER,
        },
    ),
    "MqttServerBindingLastWill": NodeType(
        properties={
            "topic": STRING,
            "qos": INTEGER,
            "message": STRING,
            "retain": BOOLEAN,
        },
    ),
    "SolaceDestination": NodeType(
        properties={
            "destinationType": enum_of("queue", "topic", type="string"),
            "deliveryMode": enum_of("direct", "persistent", type="string"),
            "queue.name": STRING,
            "queue.topicSubscriptions": STRING_LIST,
            "queue.accessType": enum_of("exclusive", "nonexclusive", type="string"),
            "queue.maxMsgSpoolSize": STRING,
            "queue.maxTtl": STRING,
            "topic.topicSubscriptions": STRING_LIST,
        },
    ),
    "SolaceDestinationList": list_of("SolaceDestination"),
}


def binding_type_name(protocol: str, kind: str) -> str:
    """Return e.g. 'KafkaChannelBinding' for ('kafka', 'Channel')."""
    return f"{protocol.capitalize()}{kind}Binding"


def install_bindings(registry: TypeRegistry) -> None:
    """Register every protocol binding type and attach it to its *Bindings type."""
    registry.define_all(BINDING_SUPPORT_TYPES)
    for protocol, shapes in PROTOCOL_BINDINGS.items():
        for kind, bindings_type in BINDING_KINDS.items():
            name = binding_type_name(protocol, kind)
            shape = shapes.get(kind)
            registry.define(name, shape if shape is not None else _empty())
            registry.extend(bindings_type, {protocol: name})
    logger.debug("Installed %d protocol bindings into %s", len(PROTOCOL_BINDINGS), registry.dialect)
