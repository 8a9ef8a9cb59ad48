"""Command line interface for specmeta."""

from .cli import cli

__all__ = ['cli']
