"""Main CLI entry point."""
import importlib
import json
import os
import sys
from typing import Any, Optional

import click

from sheetkit.core.registry import SheetsRegistry
from sheetkit.exceptions import SheetkitError
from sheetkit.runtime.context import StyleContext, style_provider
from sheetkit.runtime.hooks import resolve_styles


def import_object(target: str, param_hint: str = "TARGET") -> Any:
    """Import an object from a string (e.g. 'styles:button')."""
    if ":" not in target:
        raise click.BadParameter("Must be in format 'module:attribute'", param_hint=param_hint)

    module_name, attr_name = target.split(":", 1)

    # Add current directory to path so we can import local modules
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Could not import module '{module_name}': {e}", param_hint=param_hint)

    try:
        return getattr(module, attr_name)
    except AttributeError:
        raise click.BadParameter(
            f"Attribute '{attr_name}' not found in module '{module_name}'", param_hint=param_hint
        )


@click.group()
@click.version_option(package_name="sheetkit")
def cli():
    """sheetkit CLI.

    Run 'sheetkit extract MODULE:ATTR' to print the CSS of a style definition.
    """
    pass


@cli.command()
@click.argument("target")
@click.option("--prefix", default="", help="Class name prefix")
@click.option("--theme", "theme_target", default=None, help="Theme object as MODULE:ATTR")
@click.option("--data", default=None, help="Instance data for dynamic rules, as JSON")
def extract(target: str, prefix: str, theme_target: Optional[str], data: Optional[str]):
    """Render TARGET once on the server and print the collected CSS."""
    definition = import_object(target)
    theme = import_object(theme_target, param_hint="--theme") if theme_target else None

    instance_data = None
    if data:
        try:
            instance_data = json.loads(data)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--data")

    registry = SheetsRegistry()
    context = StyleContext(registry=registry, is_ssr=True, class_name_prefix=prefix)
    try:
        with style_provider(context):
            resolve_styles(definition, instance_data=instance_data, theme=theme)
    except SheetkitError as e:
        raise click.ClickException(str(e))

    click.echo(registry.to_string())


def main():
    cli()


if __name__ == "__main__":
    main()
