"""Metadata inspection commands.

This module provides CLI commands for looking at the metadata the framework
builds, without running anything:
- Listing the reserved metadata keys
- Building the metadata of an outline file and printing it as a tree

Example:
    $ specmeta inspect suite.yml --tag slow
"""

# Standard library imports
import logging
from typing import NoReturn, Optional

# Third-party imports
import click
from rich.console import Console

# Local application imports
from ...logger import get_logger
from ...metadata import MetadataError
from ...outline import load_outline
from .formatters import RichMetadataFormatter

logger = get_logger("cli")


def _handle_error(error: Exception, message: str) -> NoReturn:
    """Handle errors in a consistent way.

    Args:
        error: The exception that occurred
        message: Error message to display

    Raises:
        click.ClickException: Always raises to abort the command
    """
    logger.debug(f"{message}: {error}", exc_info=logger.isEnabledFor(logging.DEBUG))
    raise click.ClickException(f"{message}: {error}")


@click.command('reserved-keys')
def reserved_keys() -> None:
    """List the metadata keys user tags may not use."""
    console = Console()
    console.print(RichMetadataFormatter().format_reserved_keys())


@click.command('inspect')
@click.argument('outline', type=click.Path(exists=True, dir_okay=False))
@click.option('--tag', 'highlight_tag', default=None, help='Highlight groups and examples carrying this tag')
def inspect_outline(outline: str, highlight_tag: Optional[str]) -> None:
    """Build and print the metadata of every group and example in OUTLINE.

    Args:
        outline: Path to the YAML outline file
        highlight_tag: Tag name to highlight
    """
    console = Console()

    try:
        nodes = load_outline(outline)
    except MetadataError as e:
        _handle_error(e, "Could not build metadata")

    formatter = RichMetadataFormatter(highlight_tag)
    console.print(formatter.format_tree(nodes, title=outline))
