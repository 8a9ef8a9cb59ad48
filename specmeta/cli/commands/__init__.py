"""CLI commands for specmeta."""

from .inspect import inspect_outline, reserved_keys

__all__ = ['inspect_outline', 'reserved_keys']
