"""
htform CLI - inspect bracketed element names.

Usage:
    htform parse NAME
    htform reduce NAME [--container NAME]
    htform generate NAME --container NAME
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from .config import HTFormConfig, set_config
from .names import generate_name, parse_name, reduce_name


@click.group()
@click.version_option(package_name="htform")
@click.option("--log-level", help="Override the configured log level")
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Directory holding the pyproject.toml to read [tool.htform] from",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, project_root: Path):
    """htform - form element naming tools."""
    config = HTFormConfig.load(project_root.resolve())
    if log_level:
        config.log_level = log_level.upper()

    logging.basicConfig(level=config.log_level)
    set_config(config)
    ctx.obj = config


@cli.command()
@click.argument("name")
def parse(name: str):
    """Show how NAME maps onto nested values."""
    parsed = parse_name(name)
    click.echo(
        json.dumps(
            {
                "name": parsed.name,
                "container_name": parsed.container_name,
                "sub_levels": list(parsed.sub_levels),
                "name_path": parsed.get_name_path(),
                "reduced": parsed.reduce().name,
            },
            indent=2,
        )
    )


@cli.command()
@click.argument("name")
@click.option("--container", "-c", help="Only reduce names nested under this container")
def reduce(name: str, container: str | None):
    """Strip one nesting level from NAME."""
    click.echo(reduce_name(name, container))


@cli.command()
@click.argument("name")
@click.option("--container", "-c", required=True, help="Name of the enclosing container")
def generate(name: str, container: str):
    """Build the submission name of NAME inside CONTAINER."""
    click.echo(generate_name(name, parse_name(container)))


def main():
    cli()


if __name__ == "__main__":
    main()
