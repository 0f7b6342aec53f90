import pytest
from pydantic import ValidationError

from api_lint_types.model.base import LeafConstraint, NodeType
from api_lint_types.model.combinators import list_of, map_of
from api_lint_types.model.errors import (
    DanglingReferenceError,
    DuplicateTypeError,
    ExtensionConflictError,
    RegistryFrozenError,
    TypeRegistryError,
    UndefinedTypeError,
)
from api_lint_types.model.registry import TypeRegistry
from api_lint_types.model.resolve import ChildKind

STRING = LeafConstraint(type="string")


def _registry() -> TypeRegistry:
    registry = TypeRegistry("test")
    registry.define("Schema", NodeType(properties={"not": "Schema", "items": "SchemaList", "title": STRING}))
    registry.define("SchemaList", list_of("Schema"))
    return registry


class TestDefineAndLookup:
    def test_lookup_returns_named_copy(self):
        original = NodeType(properties={"title": STRING})
        registry = TypeRegistry("test")
        registry.define("Info", original)
        found = registry.lookup("Info")
        assert found.name == "Info"
        assert found is not original
        assert original.name == ""

    def test_lookup_undefined(self):
        with pytest.raises(UndefinedTypeError) as exc:
            TypeRegistry("test").lookup("Missing")
        assert "Missing" in str(exc.value)
        assert isinstance(exc.value, KeyError)
        assert isinstance(exc.value, TypeRegistryError)

    def test_forward_reference(self):
        registry = TypeRegistry("test")
        registry.define("Root", NodeType(properties={"info": "Info"}))
        registry.define("Info", NodeType(properties={"title": STRING}))
        child = registry.resolve_child("Root", "info", {})
        assert child.kind == ChildKind.REFERENCE
        assert registry.lookup(child.type_name).name == "Info"

    def test_self_reference(self):
        registry = _registry()
        child = registry.resolve_child("Schema", "not", {})
        assert child.type_name == "Schema"
        registry.validate()

    def test_redefine_same_descriptor_is_noop(self):
        registry = TypeRegistry("test")
        descriptor = NodeType(properties={"title": STRING})
        first = registry.define("Info", descriptor)
        assert registry.define("Info", descriptor) is first

    def test_redefine_different_descriptor(self):
        registry = TypeRegistry("test")
        registry.define("Info", NodeType(properties={"title": STRING}))
        with pytest.raises(DuplicateTypeError):
            registry.define("Info", NodeType(properties={"version": STRING}))

    def test_container_protocol(self):
        registry = _registry()
        assert "Schema" in registry
        assert "Nope" not in registry
        assert len(registry) == 2
        assert sorted(registry) == registry.names() == ["Schema", "SchemaList"]


class TestExtend:
    def test_extend_adds_exactly_new_keys(self):
        registry = TypeRegistry("test")
        registry.define("Bindings", NodeType(properties={"http": "HttpBinding"}))
        registry.extend("Bindings", {"a": STRING, "b": "KafkaBinding"})
        keys = set(registry.lookup("Bindings").properties)
        assert keys == {"http", "a", "b"}

    def test_extend_is_idempotent(self):
        registry = TypeRegistry("test")
        registry.define("Bindings", NodeType())
        registry.extend("Bindings", {"kafka": "KafkaBinding"})
        registry.extend("Bindings", {"kafka": "KafkaBinding"})
        assert registry.lookup("Bindings").properties == {"kafka": "KafkaBinding"}

    def test_conflicting_extension(self):
        registry = TypeRegistry("test")
        registry.define("Bindings", NodeType())
        registry.extend("Bindings", {"kafka": "KafkaBinding"})
        with pytest.raises(ExtensionConflictError):
            registry.extend("Bindings", {"kafka": "OtherBinding"})

    def test_extension_does_not_leak_into_shared_source(self):
        shared = NodeType(properties={})
        first = TypeRegistry("one")
        second = TypeRegistry("two")
        first.define("Bindings", shared)
        second.define("Bindings", shared)
        first.extend("Bindings", {"kafka": STRING})
        assert shared.properties == {}
        assert second.lookup("Bindings").properties == {}

    def test_extend_undefined(self):
        with pytest.raises(UndefinedTypeError):
            TypeRegistry("test").extend("Missing", {"a": None})


class TestValidateAndFreeze:
    def test_dangling_references_are_all_reported(self):
        registry = TypeRegistry("test")
        registry.define("Root", NodeType(properties={"info": "Info", "paths": "Paths"}))
        registry.define("Tags", map_of("Tag"))
        with pytest.raises(DanglingReferenceError) as exc:
            registry.validate()
        targets = sorted(target for _, _, target in exc.value.dangling)
        assert targets == ["Info", "Paths", "Tag"]

    def test_direct_resolve_as_is_checked(self):
        registry = TypeRegistry("test")
        registry.define("Mapping", NodeType(additional_properties=LeafConstraint(type="string", direct_resolve_as="Schema")))
        with pytest.raises(DanglingReferenceError):
            registry.validate()

    def test_freeze_runs_self_check(self):
        registry = TypeRegistry("test")
        registry.define("Root", NodeType(properties={"info": "Info"}))
        with pytest.raises(DanglingReferenceError):
            registry.freeze()
        assert not registry.frozen

    def test_freeze_without_self_check(self):
        registry = TypeRegistry("test")
        registry.define("Root", NodeType(properties={"info": "Info"}))
        registry.freeze(self_check=False)
        assert registry.frozen

    def test_frozen_registry_rejects_changes(self):
        registry = _registry().freeze()
        with pytest.raises(RegistryFrozenError):
            registry.define("Other", NodeType())
        with pytest.raises(RegistryFrozenError):
            registry.extend("Schema", {"x": None})

    def test_frozen_registry_still_resolves(self):
        registry = _registry().freeze()
        assert registry.resolve_child("SchemaList", 0, {}).type_name == "Schema"

    def test_frozen_descriptors_are_read_only(self):
        registry = _registry()
        registry.define("Named", NodeType(required=["name"], required_one_of=["a", "b"]))
        registry.freeze()
        schema = registry.lookup("Schema")
        with pytest.raises(TypeError):
            schema.properties["extra"] = None
        with pytest.raises(ValidationError):
            schema.additional_properties = "Schema"
        named = registry.lookup("Named")
        with pytest.raises(AttributeError):
            named.required.append("other")
        assert list(named.required) == ["name"]
        assert registry.resolve_child("Schema", "extra", 1).kind == ChildKind.REJECTED
        assert registry.resolve_child("Schema", "title", "t").kind == ChildKind.LEAF
