"""Detect which dialect an already-parsed document root declares."""

from collections.abc import Mapping
from typing import Any

from api_lint_types.model.errors import UnsupportedDialectError


def detect_dialect(root: Any) -> str:
    """Detect the dialect of a parsed API description root.

    Returns: 'oas3', 'oas2', or 'asyncapi2'.
    """
    if not isinstance(root, Mapping):
        raise UnsupportedDialectError("Document root must be a mapping")

    openapi = root.get("openapi")
    if openapi is not None:
        if str(openapi).startswith("3."):
            return "oas3"
        raise UnsupportedDialectError(f"Unsupported OpenAPI version: {openapi}")

    swagger = root.get("swagger")
    if swagger is not None:
        # YAML reads an unquoted 2.0 as a float
        if str(swagger) in ("2", "2.0"):
            return "oas2"
        raise UnsupportedDialectError(f"Unsupported Swagger version: {swagger}")

    asyncapi = root.get("asyncapi")
    if asyncapi is not None:
        if str(asyncapi).startswith("2."):
            return "asyncapi2"
        raise UnsupportedDialectError(f"Unsupported AsyncAPI version: {asyncapi}")

    raise UnsupportedDialectError("Document root declares none of `openapi`, `swagger` or `asyncapi`")
