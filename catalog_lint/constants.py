"""Shared constants for catalog-lint.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

from __future__ import annotations

# Catalog sections with fixed meaning
VERSIONS = "versions"
LIBRARIES = "libraries"
PLUGINS = "plugins"
BUNDLES = "bundles"

RESERVED_TABLES: frozenset[str] = frozenset({VERSIONS, LIBRARIES, PLUGINS, BUNDLES})

# Sections whose absence is an error
REQUIRED_TABLES: tuple[str, ...] = (VERSIONS, LIBRARIES)

# Entry attributes the projector interprets; anything else is kept as an extra
MODULE_KEY = "module"
GROUP_KEY = "group"
NAME_KEY = "name"
ID_KEY = "id"
VERSION_KEY = "version"
VERSION_REF_KEY = "version.ref"

# Keys of a rich version table, in order of preference for the direct version
RICH_VERSION_KEYS: tuple[str, ...] = ("strictly", "require", "prefer")
RICH_VERSION_REF_KEY = "ref"

# Deepest array/inline-table nesting the parser accepts
MAX_NESTING_DEPTH: int = 64

# Environment variable pointing at a YAML rules file
CONFIG_ENV_VAR = "CATALOG_LINT_CONFIG"
