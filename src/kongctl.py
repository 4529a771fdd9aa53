#!/usr/bin/env python3
"""
CLI tool for the Kong plugin operator
Applies declared plugin resources against the Kong Admin API
"""

import json
import logging
import sys

import click
import yaml
from pydantic import ValidationError
from tabulate import tabulate

from admin import KongAdminClient
from config import get_config
from errors import KongPluginError
from manifest import load_manifest
from resources import ResourceData, register_builtin_handlers
from schema import changed_attributes, replacement_attributes


def _client() -> KongAdminClient:
    return KongAdminClient.from_config(get_config().kong)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _show(data: ResourceData, output: str = "table") -> None:
    record = {"id": data.id, **data.attributes}
    if output == "json":
        click.echo(json.dumps(record, indent=2))
    elif output == "yaml":
        click.echo(yaml.dump(record, default_flow_style=False))
    else:
        rows = [[key, value] for key, value in record.items()]
        click.echo(tabulate(rows, headers=["Attribute", "Value"], tablefmt="grid"))


@click.group()
def cli():
    """Kong plugin operator CLI - declarative management of Kong plugins"""
    cfg = get_config()
    logging.basicConfig(level=cfg.logging.level, format=cfg.logging.format)


@cli.command()
def kinds():
    """List managed resource kinds"""
    registry = register_builtin_handlers()
    rows = []
    for name in registry.list_handlers():
        handler = registry.get_handler(name)
        rows.append(
            [
                name,
                "yes" if handler.supports_update else "no",
                ", ".join(a.name for a in handler.attributes if a.required),
            ]
        )
    click.echo(tabulate(rows, headers=["Kind", "Update", "Required"], tablefmt="grid"))


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
def validate(filename):
    """Validate a resource manifest without contacting Kong"""
    try:
        manifest = load_manifest(filename)
    except (ValidationError, yaml.YAMLError, json.JSONDecodeError) as e:
        _fail(f"Invalid manifest: {e}")

    handler = register_builtin_handlers().get_handler(manifest.kind)
    is_valid, error = handler.validate_spec(manifest.spec)
    if not is_valid:
        _fail(error)

    click.echo(f"{manifest.kind} manifest is valid")


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.option("--id", "resource_id", default=None, help="Id of an existing resource")
@click.option(
    "--replace", is_flag=True, help="Allow delete and re-create for force-new changes"
)
@click.option("--output", "-o", type=click.Choice(["table", "json", "yaml"]), default="table")
def apply(filename, resource_id, replace, output):
    """Create or update a resource from a YAML/JSON manifest"""
    try:
        manifest = load_manifest(filename)
    except (ValidationError, yaml.YAMLError, json.JSONDecodeError) as e:
        _fail(f"Invalid manifest: {e}")

    handler = register_builtin_handlers().get_handler(manifest.kind)
    is_valid, error = handler.validate_spec(manifest.spec)
    if not is_valid:
        _fail(error)

    client = _client()
    resource_id = resource_id or manifest.id
    desired = ResourceData(id="", attributes=dict(manifest.spec))

    try:
        if not resource_id:
            handler.create(desired, client)
            click.echo("Resource created successfully!")
            _show(desired, output)
            return

        current = ResourceData(id=resource_id)
        handler.read(current, client)
        if not current.exists:
            click.echo(f"Resource {resource_id} no longer exists, re-creating")
            handler.create(desired, client)
            _show(desired, output)
            return

        drifted = changed_attributes(
            handler.attributes, current.attributes, desired.attributes
        )
        if not drifted:
            click.echo("No changes")
            _show(current, output)
            return

        changed = replacement_attributes(
            handler.attributes, current.attributes, desired.attributes
        )
        if handler.supports_update and not changed:
            desired.id = current.id
            handler.update(desired, client)
            click.echo("Resource updated successfully!")
            _show(desired, output)
            return

        if not replace:
            _fail(
                f"changes to {', '.join(changed or drifted)} force re-creation; "
                "re-run with --replace"
            )

        handler.delete(current, client)
        handler.create(desired, client)
        click.echo("Resource replaced successfully!")
        _show(desired, output)
    except KongPluginError as e:
        _fail(e.message)


@cli.command()
@click.argument("kind")
@click.argument("resource_id")
@click.option("--output", "-o", type=click.Choice(["table", "json", "yaml"]), default="table")
def get(kind, resource_id, output):
    """Show a resource as Kong reports it"""
    try:
        handler = register_builtin_handlers().get_handler(kind)
    except ValueError as e:
        _fail(str(e))

    data = ResourceData(id=resource_id)
    try:
        handler.read(data, _client())
    except KongPluginError as e:
        _fail(e.message)

    if not data.exists:
        _fail(f"{kind} {resource_id} not found")
    _show(data, output)


@cli.command()
@click.argument("kind")
@click.argument("resource_id")
@click.confirmation_option(prompt="Are you sure you want to delete this resource?")
def delete(kind, resource_id):
    """Delete a resource"""
    try:
        handler = register_builtin_handlers().get_handler(kind)
    except ValueError as e:
        _fail(str(e))

    try:
        handler.delete(ResourceData(id=resource_id), _client())
    except KongPluginError as e:
        _fail(e.message)

    click.echo("Resource deleted")


if __name__ == "__main__":
    cli()
