"""CLI entry point for api-lint-types."""

import logging

import click
import yaml
from pydantic import ValidationError

from api_lint_types.config import RegistrySettings
from api_lint_types.dialects.registries import DIALECTS, build_registry
from api_lint_types.model.base import LeafConstraint, NodeType
from api_lint_types.model.errors import TypeRegistryError
from api_lint_types.model.registry import TypeRegistry


def _load_registry(dialect: str, settings: RegistrySettings) -> TypeRegistry:
    try:
        return build_registry(dialect, settings)
    except TypeRegistryError as e:
        raise click.ClickException(str(e)) from e


def _describe_rule(rule) -> object:
    if rule is None:
        return None
    if isinstance(rule, str):
        return {"$type": rule}
    if isinstance(rule, LeafConstraint):
        return rule.model_dump(exclude_defaults=True) or "any"
    return f"<resolver {getattr(rule, '__name__', type(rule).__name__)}>"


def describe_type(descriptor: NodeType) -> dict:
    """Render a descriptor as plain data for display."""
    summary: dict = {"name": descriptor.name}
    if descriptor.description:
        summary["description"] = descriptor.description
    if descriptor.documentation_link:
        summary["documentationLink"] = descriptor.documentation_link
    if descriptor.is_sequence:
        summary["items"] = _describe_rule(descriptor.items)
    if descriptor.properties:
        summary["properties"] = {key: _describe_rule(rule) for key, rule in descriptor.properties.items()}
    if descriptor.additional_properties is not None:
        summary["additionalProperties"] = _describe_rule(descriptor.additional_properties)
    if callable(descriptor.required):
        summary["required"] = f"<conditional {descriptor.required.__name__}>"
    elif descriptor.required:
        summary["required"] = list(descriptor.required)
    if descriptor.required_one_of:
        summary["requiredOneOf"] = list(descriptor.required_one_of)
    if descriptor.allowed is not None:
        summary["allowed"] = f"<conditional {descriptor.allowed.__name__}>"
    if descriptor.extensions_prefix:
        summary["extensionsPrefix"] = descriptor.extensions_prefix
    return summary


@click.group()
@click.option("--log-level", default=None, help="Logging level (overrides API_LINT_TYPES_LOG_LEVEL).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """API Lint Types: inspect the node type registries of each API dialect."""
    try:
        settings = RegistrySettings.from_env()
        if log_level:
            settings = RegistrySettings.model_validate({**settings.model_dump(), "log_level": log_level})
    except ValidationError as e:
        message = "; ".join(err["msg"] for err in e.errors())
        raise click.BadParameter(message, param_hint="'--log-level' or API_LINT_TYPES_*") from e
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


@main.command()
@click.argument("dialect", type=click.Choice(DIALECTS))
@click.pass_obj
def types(settings: RegistrySettings, dialect: str):
    """List the type names registered for DIALECT."""
    registry = _load_registry(dialect, settings)
    for name in registry.names():
        click.echo(name)


@main.command()
@click.argument("dialect", type=click.Choice(DIALECTS))
@click.argument("type_name")
@click.pass_obj
def describe(settings: RegistrySettings, dialect: str, type_name: str):
    """Show the descriptor registered as TYPE_NAME in DIALECT."""
    registry = _load_registry(dialect, settings)
    try:
        descriptor = registry.lookup(type_name)
    except TypeRegistryError as e:
        raise click.ClickException(str(e)) from e
    click.echo(yaml.safe_dump(describe_type(descriptor), sort_keys=False, allow_unicode=True))


@main.command("self-check")
@click.argument("dialects", nargs=-1, type=click.Choice(DIALECTS))
@click.pass_obj
def self_check(settings: RegistrySettings, dialects: tuple[str, ...]):
    """Build registries and verify every type reference resolves."""
    settings = settings.model_copy(update={"self_check": True})
    for dialect in dialects or DIALECTS:
        registry = _load_registry(dialect, settings)
        click.echo(f"{dialect}: ok ({len(registry)} types)")
