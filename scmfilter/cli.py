"""Main CLI module for scmfilter.

This module re-exports the CLI for convenience. The main implementation
is in __main__.py.
"""

from scmfilter.__main__ import cli

__all__ = ["cli"]
