import pytest

from api_lint_types.config import RegistrySettings
from api_lint_types.dialects.asyncapi2_bindings import PROTOCOL_BINDINGS, binding_type_name
from api_lint_types.dialects.detect import detect_dialect
from api_lint_types.dialects.registries import DIALECTS, build_all, build_registry
from api_lint_types.model.checks import check_allowed, check_required, required_keys
from api_lint_types.model.errors import RegistryFrozenError, UnsupportedDialectError
from api_lint_types.model.resolve import ChildKind


@pytest.fixture(scope="module")
def oas3():
    return build_registry("oas3")


@pytest.fixture(scope="module")
def oas2():
    return build_registry("oas2")


@pytest.fixture(scope="module")
def asyncapi2():
    return build_registry("asyncapi2")


class TestBuildRegistry:
    @pytest.mark.parametrize("dialect", DIALECTS)
    def test_self_check_passes_and_freezes(self, dialect):
        registry = build_registry(dialect)
        assert registry.frozen
        assert "Root" in registry
        assert "Schema" in registry

    def test_unknown_dialect(self):
        with pytest.raises(UnsupportedDialectError):
            build_registry("raml")

    def test_unfrozen_when_disabled(self):
        registry = build_registry("oas3", RegistrySettings(freeze=False))
        assert not registry.frozen

    def test_each_build_is_independent(self):
        first = build_registry("oas3", RegistrySettings(freeze=False))
        second = build_registry("oas3")
        first.extend("Root", {"x-extra": None})
        assert "x-extra" not in second.lookup("Root").properties

    def test_build_all(self):
        registries = build_all()
        assert set(registries) == set(DIALECTS)


class TestOas3Types:
    def test_combinator_types_are_named(self, oas3):
        assert oas3.lookup("ParameterList").items == "Parameter"
        assert oas3.lookup("NamedSchemas").additional_properties == "Schema"

    def test_paths_only_accept_slash_keys(self, oas3):
        assert oas3.resolve_child("Paths", "/pets", {}).type_name == "PathItem"
        assert oas3.resolve_child("Paths", "pets", {}).kind == ChildKind.REJECTED

    def test_response_codes(self, oas3):
        assert oas3.resolve_child("Responses", "200", {}).type_name == "Response"
        assert oas3.resolve_child("Responses", "4XX", {}).type_name == "Response"
        assert oas3.resolve_child("Responses", "default", {}).type_name == "Response"
        assert oas3.resolve_child("Responses", "ok", {}).kind == ChildKind.REJECTED

    def test_schema_items_depend_on_value(self, oas3):
        assert oas3.resolve_child("Schema", "items", {}).type_name == "Schema"
        assert oas3.resolve_child("Schema", "items", [{}]).type_name == "SchemaList"

    def test_additional_properties_boolean_or_schema(self, oas3):
        assert oas3.resolve_child("Schema", "additionalProperties", False).kind == ChildKind.LEAF
        assert oas3.resolve_child("Schema", "additionalProperties", {}).type_name == "Schema"

    def test_security_scheme_required_by_type(self, oas3):
        scheme = oas3.lookup("SecurityScheme")
        assert check_required(scheme, {"type": "http", "scheme": "bearer"}) == []
        assert {v.key for v in check_required(scheme, {"type": "apiKey"})} == {"name", "in"}
        assert required_keys(scheme, {"type": "oauth2"}) == ["type", "flows"]
        assert required_keys(scheme, {}) == ["type"]

    def test_security_scheme_allowed_by_type(self, oas3):
        scheme = oas3.lookup("SecurityScheme")
        value = {"type": "http", "scheme": "basic", "flows": {}, "x-owner": "team"}
        assert [v.key for v in check_allowed(scheme, value)] == ["flows"]

    def test_security_scheme_with_unhashable_type(self, oas3):
        scheme = oas3.lookup("SecurityScheme")
        assert required_keys(scheme, {"type": ["http"]}) == ["type"]

    def test_example_markers(self, oas3):
        assert oas3.resolve_child("MediaType", "example", {"any": "thing"}).leaf.is_example
        assert not oas3.resolve_child("Example", "value", {}).leaf.resolvable

    def test_extensions(self, oas3):
        assert oas3.resolve_child("Info", "x-audience", "internal").kind == ChildKind.EXTENSION
        assert oas3.resolve_child("Info", "x-logo", {}).type_name == "Logo"


class TestOas2Types:
    def test_body_parameter_requires_schema(self, oas2):
        parameter = oas2.lookup("Parameter")
        assert required_keys(parameter, {"in": "body"}) == ["name", "in", "schema"]
        assert required_keys(parameter, {"in": "query", "type": "array"}) == ["name", "in", "type", "items"]

    def test_oauth2_flow_required(self, oas2):
        scheme = oas2.lookup("SecurityScheme")
        missing = {v.key for v in check_required(scheme, {"type": "oauth2", "flow": "accessCode", "scopes": {}})}
        assert missing == {"authorizationUrl", "tokenUrl"}

    def test_definitions_are_schemas(self, oas2):
        child = oas2.resolve_child("Root", "definitions", {})
        assert child.type_name == "NamedSchemas"
        assert oas2.resolve_child("NamedSchemas", "Pet", {}).type_name == "Schema"


class TestAsyncApi2Types:
    def test_json_schema_shapes_imported(self, asyncapi2):
        assert asyncapi2.resolve_child("Schema", "if", {}).type_name == "Schema"
        assert asyncapi2.resolve_child("Dependencies", "a", ["b"]).kind == ChildKind.LEAF
        assert asyncapi2.resolve_child("Dependencies", "a", {}).type_name == "Schema"

    def test_bindings_are_patched(self, asyncapi2):
        for protocol in PROTOCOL_BINDINGS:
            for kind in ("Server", "Channel", "Operation", "Message"):
                bindings = asyncapi2.lookup(f"{kind}Bindings")
                assert bindings.properties[protocol] == binding_type_name(protocol, kind)

    def test_kafka_channel_binding(self, asyncapi2):
        child = asyncapi2.resolve_child("ChannelBindings", "kafka", {})
        assert child.type_name == "KafkaChannelBinding"
        assert asyncapi2.resolve_child("KafkaChannelBinding", "topicConfiguration", {}).type_name == "KafkaTopicConfiguration"

    def test_unpatched_protocol_is_plain_object(self, asyncapi2):
        child = asyncapi2.resolve_child("ChannelBindings", "sqs", {})
        assert child.kind == ChildKind.LEAF
        assert child.leaf.type == "object"

    def test_binding_allow_list(self, asyncapi2):
        bindings = asyncapi2.lookup("ServerBindings")
        assert [v.key for v in check_allowed(bindings, {"mqtt": {}, "carrier-pigeon": {}})] == ["carrier-pigeon"]

    def test_server_names(self, asyncapi2):
        assert asyncapi2.resolve_child("ServerMap", "production_1", {}).type_name == "Server"
        assert asyncapi2.resolve_child("ServerMap", "prod server", {}).kind == ChildKind.REJECTED

    def test_patch_after_freeze_rejected(self, asyncapi2):
        with pytest.raises(RegistryFrozenError):
            asyncapi2.extend("ChannelBindings", {"carrier-pigeon": None})


class TestDetectDialect:
    def test_openapi3(self):
        assert detect_dialect({"openapi": "3.0.3"}) == "oas3"
        assert detect_dialect({"openapi": 3.0}) == "oas3"

    def test_swagger(self):
        assert detect_dialect({"swagger": "2.0"}) == "oas2"
        assert detect_dialect({"swagger": 2.0}) == "oas2"

    def test_asyncapi(self):
        assert detect_dialect({"asyncapi": "2.6.0"}) == "asyncapi2"

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedDialectError):
            detect_dialect({"asyncapi": "3.0.0"})

    def test_unknown_document(self):
        with pytest.raises(UnsupportedDialectError):
            detect_dialect({"info": {}})
        with pytest.raises(UnsupportedDialectError):
            detect_dialect(["not", "a", "mapping"])
