"""Typed configuration for VuePress documentation sites.

This package models the record a static documentation generator reads at
build start (title, head tags, theme navigation, sidebars, plugin options),
loads it from YAML, validates it, and exports it as ``config.js``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from vpsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
