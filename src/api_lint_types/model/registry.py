"""Named collection of node type descriptors for one dialect."""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from api_lint_types.model.base import FrozenNodeType, LeafConstraint, NodeType, PropertyRule
from api_lint_types.model.errors import (
    DanglingReferenceError,
    DuplicateTypeError,
    ExtensionConflictError,
    RegistryFrozenError,
    UndefinedTypeError,
)
from api_lint_types.model.resolve import ResolvedChild, resolve_child

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Owns every descriptor of one dialect.

    Rules reference other descriptors by name, and names are looked up only
    when a child is resolved, so definition order does not matter. The
    registry is mutable until freeze(); after that it is read-only and can be
    shared between concurrent traversals.
    """

    def __init__(self, dialect: str):
        self.dialect = dialect
        self._types: dict[str, NodeType] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def define(self, name: str, descriptor: NodeType) -> NodeType:
        """Register a copy of `descriptor` under `name` and return the copy."""
        self._ensure_mutable()
        owned = descriptor.model_copy(update={"name": name, "properties": dict(descriptor.properties)})
        existing = self._types.get(name)
        if existing is not None:
            if existing == owned:
                return existing
            raise DuplicateTypeError(f"Type '{name}' is already defined in the {self.dialect} registry")
        self._types[name] = owned
        logger.debug("Defined %s type %s", self.dialect, name)
        return owned

    def define_all(self, descriptors: Mapping[str, NodeType]) -> None:
        for name, descriptor in descriptors.items():
            self.define(name, descriptor)

    def lookup(self, name: str) -> NodeType:
        try:
            return self._types[name]
        except KeyError:
            raise UndefinedTypeError(name, self.dialect) from None

    def extend(self, name: str, properties: Mapping[str, PropertyRule]) -> NodeType:
        """Add keys to an already defined descriptor.

        Re-adding a key with the same rule is a no-op; a different rule for
        an existing key is a conflict.
        """
        self._ensure_mutable()
        descriptor = self.lookup(name)
        for key, rule in properties.items():
            if key in descriptor.properties:
                current = descriptor.properties[key]
                if current is rule or current == rule:
                    continue
                raise ExtensionConflictError(
                    f"Cannot extend {self.dialect} type '{name}': key '{key}' already has a different rule"
                )
            descriptor.properties[key] = rule
        logger.debug("Extended %s type %s with %s", self.dialect, name, ", ".join(properties))
        return descriptor

    def resolve_child(self, type_name: str, key: str | int, value: Any) -> ResolvedChild:
        return resolve_child(self.lookup(type_name), key, value)

    def validate(self) -> None:
        """Check that every statically named reference resolves.

        Resolver functions are opaque and cannot be checked here.
        """
        dangling = []
        for owner, key, target in self._references():
            if target not in self._types:
                dangling.append((owner, key, target))
        if dangling:
            raise DanglingReferenceError(self.dialect, dangling)

    def freeze(self, self_check: bool = True) -> "TypeRegistry":
        if self_check:
            self.validate()
        self._types = {name: FrozenNodeType.of(descriptor) for name, descriptor in self._types.items()}
        self._frozen = True
        logger.info("Froze %s registry with %d types", self.dialect, len(self._types))
        return self

    def names(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<TypeRegistry {self.dialect} types={len(self._types)} {state}>"

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"The {self.dialect} registry is frozen")

    def _references(self) -> Iterator[tuple[str, str, str]]:
        for name, descriptor in self._types.items():
            for key, rule in descriptor.properties.items():
                yield from _rule_targets(name, key, rule)
            yield from _rule_targets(name, "<additional_properties>", descriptor.additional_properties)
            yield from _rule_targets(name, "<items>", descriptor.items)


def _rule_targets(owner: str, key: str, rule: PropertyRule) -> Iterator[tuple[str, str, str]]:
    if isinstance(rule, str):
        yield owner, key, rule
    elif isinstance(rule, LeafConstraint):
        yield from _leaf_targets(owner, key, rule)


def _leaf_targets(owner: str, key: str, leaf: LeafConstraint) -> Iterator[tuple[str, str, str]]:
    if leaf.direct_resolve_as:
        yield owner, key, leaf.direct_resolve_as
    if leaf.items is not None:
        yield from _leaf_targets(owner, key, leaf.items)
    if leaf.additional_properties is not None:
        yield from _leaf_targets(owner, key, leaf.additional_properties)
