"""Main CLI module for specmeta."""

import click

from .commands import inspect_outline, reserved_keys


@click.group()
@click.version_option(package_name='specmeta')
def cli():
    """specmeta CLI for inspecting test group and example metadata."""
    pass

# Register commands
cli.add_command(reserved_keys)
cli.add_command(inspect_outline)

if __name__ == '__main__':
    cli()
