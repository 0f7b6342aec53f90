"""Reference structural walker.

Walks an already-parsed document tree with a TypeRegistry and collects
shape violations. Following `$ref` pointers is delegated to the caller
through `resolve_ref`; this module never loads documents.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from api_lint_types.model.base import LeafConstraint, NodeType, Violation, ViolationCode
from api_lint_types.model.checks import check_leaf, check_node, json_type
from api_lint_types.model.registry import TypeRegistry
from api_lint_types.model.resolve import ChildKind, resolve_child

logger = logging.getLogger(__name__)

# resolve_ref(pointer) returns the target node, or None when it cannot be resolved.
RefResolver = Callable[[str], Any]


class ShapeWalker:
    """Walks one document; holds per-traversal state only."""

    def __init__(self, registry: TypeRegistry, resolve_ref: RefResolver | None = None):
        self.registry = registry
        self.resolve_ref = resolve_ref
        self.violations: list[Violation] = []
        # Holds each visited container so its id cannot be reused by a later
        # object, e.g. a fresh target returned by resolve_ref.
        self._visited: dict[tuple[int, str], Any] = {}

    def walk(self, node: Any, type_name: str, path: list | None = None) -> list[Violation]:
        self._visit(node, type_name, list(path or []))
        return self.violations

    def _visit(self, node: Any, type_name: str, path: list) -> None:
        if isinstance(node, (Mapping, list)):
            marker = (id(node), type_name)
            if marker in self._visited:
                return
            self._visited[marker] = node

        if isinstance(node, Mapping) and isinstance(node.get("$ref"), str):
            self._follow_ref(node["$ref"], type_name, path)
            return

        descriptor = self.registry.lookup(type_name)
        if descriptor.is_sequence:
            if not isinstance(node, list):
                self._type_mismatch(descriptor, "array", node, path)
                return
            for index, item in enumerate(node):
                self._visit_child(descriptor, index, item, path + [index])
            return

        if not isinstance(node, Mapping):
            self._type_mismatch(descriptor, "object", node, path)
            return

        self.violations.extend(check_node(descriptor, node, path))
        for key, value in node.items():
            key = str(key)
            self._visit_child(descriptor, key, value, path + [key])

    def _visit_child(self, descriptor: NodeType, key: str | int, value: Any, path: list) -> None:
        child = resolve_child(descriptor, key, value)
        if child.kind == ChildKind.REJECTED:
            self.violations.append(
                Violation(
                    code=ViolationCode.UNKNOWN_KEY,
                    type_name=descriptor.name,
                    key=str(key),
                    path=path,
                    message=f"Property `{key}` is not expected here.",
                )
            )
        elif child.kind == ChildKind.REFERENCE:
            self._visit(value, child.type_name, path)
        elif child.kind == ChildKind.LEAF:
            self._check_leaf(descriptor, child.leaf, value, path)

    def _check_leaf(self, descriptor: NodeType, leaf: LeafConstraint, value: Any, path: list) -> None:
        found = check_leaf(leaf, value, path, descriptor.name)
        self.violations.extend(found)
        if leaf.direct_resolve_as and not found:
            self._follow_ref(value, leaf.direct_resolve_as, path, direct=True)

    def _follow_ref(self, pointer: str, type_name: str, path: list, direct: bool = False) -> None:
        if self.resolve_ref is None:
            return
        target = self.resolve_ref(pointer)
        if target is None:
            self.violations.append(
                Violation(
                    code=ViolationCode.UNRESOLVED_REF,
                    type_name=type_name,
                    path=path,
                    message=f"Can't resolve $ref: `{pointer}`.",
                )
            )
            return
        if direct and not isinstance(target, Mapping):
            self.violations.append(
                Violation(
                    code=ViolationCode.MAPPING_TARGET_NOT_SCHEMA,
                    type_name=type_name,
                    path=path,
                    message=f"Mapping target `{pointer}` does not point to a {type_name}.",
                )
            )
            return
        logger.debug("Following %s as %s", pointer, type_name)
        self._visit(target, type_name, path)

    def _type_mismatch(self, descriptor: NodeType, expected: str, node: Any, path: list) -> None:
        self.violations.append(
            Violation(
                code=ViolationCode.TYPE_MISMATCH,
                type_name=descriptor.name,
                key=str(path[-1]) if path else None,
                path=path,
                message=f"Expected type `{expected}` but got `{json_type(node)}`.",
            )
        )


def walk(
    registry: TypeRegistry,
    node: Any,
    type_name: str = "Root",
    resolve_ref: RefResolver | None = None,
) -> list[Violation]:
    """Walk `node` as `type_name` and return every shape violation found."""
    return ShapeWalker(registry, resolve_ref).walk(node, type_name)
