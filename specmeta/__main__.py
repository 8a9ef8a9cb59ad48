"""
CLI entry point for specmeta.
"""
import sys

import yaml
from rich.console import Console

from .cli import cli
from .config import get_config

console = Console(stderr=True)


def main():
    try:
        # Initialize configuration
        get_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)

    cli()


if __name__ == "__main__":
    main()
