"""Configuration of the data-driven validation rules.

Three rules depend on curated data rather than catalog structure: the
known-vulnerable version deny-list, the critical dependency set, and the
table of incompatible version pairs. The built-in defaults can be replaced by
a YAML rules file, resolved with the following precedence (highest to lowest):

1. CLI argument (``--config``)
2. Environment variable (CATALOG_LINT_CONFIG)
3. Built-in defaults

Rules file layout (every key optional; unknown keys are ignored):

    vulnerable_versions:
      junit: ["4.10", "4.11", "4.12"]
    critical_dependencies: [junit, mockk]
    incompatible_versions:
      - first: agp
        first_version: "8.11.1"
        second: kotlin
        second_version: "1.8.0"
        message: "AGP 8.11.1 requires Kotlin 1.9.0+"

Usage:
    from catalog_lint.config import resolve_config

    config = resolve_config(cli_path)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from catalog_lint.constants import CONFIG_ENV_VAR
from catalog_lint.errors import ConfigInvalidStructureError, ConfigNotFoundError, ConfigParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncompatibleVersions:
    """A known-bad combination of two tool versions.

    Attributes:
        first: Version key (or plugin alias) of the first tool, e.g. "agp".
        first_version: Exact version of the first tool.
        second: Version key (or plugin alias) of the second tool, e.g. "kotlin".
        second_version: Exact version of the second tool.
        message: Explanation appended to the error.
    """

    first: str
    first_version: str
    second: str
    second_version: str
    message: str


DEFAULT_VULNERABLE_VERSIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {"junit": ("4.10", "4.11", "4.12")}
)

DEFAULT_INCOMPATIBLE_VERSIONS: tuple[IncompatibleVersions, ...] = (
    IncompatibleVersions(
        first="agp",
        first_version="8.11.1",
        second="kotlin",
        second_version="1.8.0",
        message="AGP 8.11.1 requires Kotlin 1.9.0+",
    ),
)


@dataclass(frozen=True)
class ValidatorConfig:
    """Immutable data tables consulted by the validation rules.

    Attributes:
        vulnerable_versions: Dependency name to versions with known vulnerabilities.
        critical_dependencies: Coordinate substrings of which at least one library
            must match; empty disables the check.
        incompatible_versions: Version combinations that are errors.
    """

    vulnerable_versions: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_VULNERABLE_VERSIONS
    )
    critical_dependencies: tuple[str, ...] = ()
    incompatible_versions: tuple[IncompatibleVersions, ...] = DEFAULT_INCOMPATIBLE_VERSIONS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, source: str = "<config>") -> ValidatorConfig:
        """Build a config from parsed YAML, falling back to defaults per key.

        Raises:
            ConfigInvalidStructureError: If a known key has the wrong shape.
        """
        defaults = cls()

        vulnerable = defaults.vulnerable_versions
        if "vulnerable_versions" in data:
            raw = data["vulnerable_versions"]
            if not isinstance(raw, Mapping) or not all(
                isinstance(versions, list) for versions in raw.values()
            ):
                raise ConfigInvalidStructureError(
                    source, "'vulnerable_versions' must map dependency names to lists of versions"
                )
            vulnerable = MappingProxyType(
                {str(name): tuple(str(v) for v in versions) for name, versions in raw.items()}
            )

        critical = defaults.critical_dependencies
        if "critical_dependencies" in data:
            raw = data["critical_dependencies"]
            if not isinstance(raw, list):
                raise ConfigInvalidStructureError(source, "'critical_dependencies' must be a list")
            critical = tuple(str(item) for item in raw)

        incompatible = defaults.incompatible_versions
        if "incompatible_versions" in data:
            raw = data["incompatible_versions"]
            if not isinstance(raw, list):
                raise ConfigInvalidStructureError(source, "'incompatible_versions' must be a list")
            incompatible = tuple(_incompatible_from_dict(entry, source) for entry in raw)

        return cls(
            vulnerable_versions=vulnerable,
            critical_dependencies=critical,
            incompatible_versions=incompatible,
        )


_INCOMPATIBLE_FIELDS = ("first", "first_version", "second", "second_version")


def _incompatible_from_dict(entry: Any, source: str) -> IncompatibleVersions:
    if not isinstance(entry, Mapping) or any(name not in entry for name in _INCOMPATIBLE_FIELDS):
        raise ConfigInvalidStructureError(
            source,
            f"each 'incompatible_versions' entry needs {', '.join(_INCOMPATIBLE_FIELDS)}",
        )
    first, first_version = str(entry["first"]), str(entry["first_version"])
    second, second_version = str(entry["second"]), str(entry["second_version"])
    message = entry.get("message") or f"{first} {first_version} is not compatible with {second} {second_version}"
    return IncompatibleVersions(first, first_version, second, second_version, str(message))


def load_config(path: Path) -> ValidatorConfig:
    """Load a YAML rules file.

    Args:
        path: Path to the rules file.

    Returns:
        ValidatorConfig; an empty file yields the defaults.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file is not valid YAML.
        ConfigInvalidStructureError: If the YAML has the wrong shape.
    """
    if not path.exists():
        raise ConfigNotFoundError(str(path))

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return ValidatorConfig()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(path), str(e)) from e

    if data is None:
        return ValidatorConfig()
    if not isinstance(data, Mapping):
        raise ConfigInvalidStructureError(str(path), "top level must be a mapping")

    logger.debug("Loaded rules file %s", path)
    return ValidatorConfig.from_dict(data, source=str(path))


def resolve_config(cli_path: Path | None = None) -> ValidatorConfig:
    """Resolve the rules configuration with full precedence.

    Precedence (highest to lowest):
    1. CLI argument (cli_path)
    2. Environment variable (CATALOG_LINT_CONFIG)
    3. Built-in defaults

    Args:
        cli_path: Rules file passed on the command line, if any.

    Returns:
        Resolved ValidatorConfig.
    """
    if cli_path is not None:
        return load_config(cli_path)

    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        logger.debug("Using rules file from %s", CONFIG_ENV_VAR)
        return load_config(Path(env_value))

    return ValidatorConfig()
