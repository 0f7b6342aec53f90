"""Assembly of per-dialect registries.

Build order: combinator-built and base dialect tables, then extension
patches (AsyncAPI protocol bindings), then the dangling reference self-check,
then freeze.
"""

import logging
from typing import Callable

from api_lint_types.config import RegistrySettings
from api_lint_types.dialects.asyncapi2 import ASYNCAPI2_TYPES
from api_lint_types.dialects.asyncapi2_bindings import install_bindings
from api_lint_types.dialects.json_schema import JSON_SCHEMA_TYPES
from api_lint_types.dialects.oas2 import OAS2_TYPES
from api_lint_types.dialects.oas3 import OAS3_TYPES
from api_lint_types.model.errors import UnsupportedDialectError
from api_lint_types.model.registry import TypeRegistry

logger = logging.getLogger(__name__)


def _build_oas3(registry: TypeRegistry) -> None:
    registry.define_all(OAS3_TYPES)


def _build_oas2(registry: TypeRegistry) -> None:
    registry.define_all(OAS2_TYPES)


def _build_asyncapi2(registry: TypeRegistry) -> None:
    registry.define_all(JSON_SCHEMA_TYPES)
    registry.define_all(ASYNCAPI2_TYPES)
    install_bindings(registry)


DIALECT_BUILDERS: dict[str, Callable[[TypeRegistry], None]] = {
    "oas3": _build_oas3,
    "oas2": _build_oas2,
    "asyncapi2": _build_asyncapi2,
}

DIALECTS = tuple(DIALECT_BUILDERS)


def build_registry(dialect: str, settings: RegistrySettings | None = None) -> TypeRegistry:
    """Build a fresh registry for `dialect`.

    Raises UnsupportedDialectError for unknown dialects and
    DanglingReferenceError when the self-check fails.
    """
    settings = settings or RegistrySettings()
    try:
        builder = DIALECT_BUILDERS[dialect]
    except KeyError:
        raise UnsupportedDialectError(
            f"Unsupported dialect '{dialect}', expected one of: {', '.join(DIALECTS)}"
        ) from None

    registry = TypeRegistry(dialect)
    builder(registry)
    if settings.freeze:
        registry.freeze(self_check=settings.self_check)
    elif settings.self_check:
        registry.validate()
    logger.debug("Built %s registry with %d types", dialect, len(registry))
    return registry


def build_all(settings: RegistrySettings | None = None) -> dict[str, TypeRegistry]:
    return {dialect: build_registry(dialect, settings) for dialect in DIALECTS}
