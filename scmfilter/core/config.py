"""Configuration loading and parsing for scmfilter.

This module provides the ConfigLoader class for reading TOML configuration
files and the Config dataclass for storing configuration values.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomli
from pydantic import ValidationError

from scmfilter.models.trait_def import TraitConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "scmfilter.toml"

# Overrides git root detection during config discovery
GIT_ROOT_ENV = "SCMFILTER_GIT_ROOT"

OUTPUT_FORMATS = ("text", "json", "count")


class ConfigError(Exception):
    """Exception raised for configuration parsing errors.

    Attributes:
        line: Line number where error occurred (if available)
        path: Path to the config file (if available)
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        path: Optional[Path] = None
    ):
        self.line = line
        self.path = path

        parts = []
        if path:
            parts.append(f"Error in {path}")
        if line is not None:
            parts.append(f"at line {line}")
        if parts:
            full_message = f"{' '.join(parts)}: {message}"
        else:
            full_message = message

        super().__init__(full_message)


@dataclass
class GeneralConfig:
    """General configuration settings."""

    show_excluded: bool = False
    output_format: str = "text"

    @classmethod
    def from_dict(cls, data: dict, path: Optional[Path] = None) -> "GeneralConfig":
        """Create GeneralConfig from the [general] table.

        Raises:
            ConfigError: If a value has the wrong type or is not allowed.
        """
        show_excluded = data.get("show_excluded", False)
        if not isinstance(show_excluded, bool):
            raise ConfigError(
                f"general.show_excluded must be true or false, got {show_excluded!r}",
                path=path,
            )

        output_format = data.get("output_format", "text")
        if not isinstance(output_format, str) or output_format.lower() not in OUTPUT_FORMATS:
            raise ConfigError(
                f"general.output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {output_format!r}",
                path=path,
            )

        return cls(show_excluded=show_excluded, output_format=output_format.lower())


@dataclass
class Config:
    """Complete scmfilter configuration.

    Attributes:
        general: Output-related settings
        traits: Traits to apply, in order
    """

    general: GeneralConfig = field(default_factory=GeneralConfig)
    traits: list[TraitConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict, path: Optional[Path] = None) -> "Config":
        """Create Config from a dictionary parsed from TOML.

        Raises:
            ConfigError: If a general setting or trait entry is malformed.
        """
        general = data.get("general", {})
        if not isinstance(general, dict):
            raise ConfigError("general must be a table", path=path)

        traits = []
        for index, entry in enumerate(data.get("traits", [])):
            if not isinstance(entry, dict):
                raise ConfigError(f"traits[{index}] must be a table", path=path)
            try:
                traits.append(TraitConfig.from_dict(entry))
            except ValidationError as e:
                raise ConfigError(f"traits[{index}]: {e}", path=path) from e

        return cls(
            general=GeneralConfig.from_dict(general, path=path),
            traits=traits,
        )


class ConfigLoader:
    """Loader for scmfilter TOML configuration files.

    Example usage:
        loader = ConfigLoader()
        config = loader.load(Path("scmfilter.toml"))

        # Or merge every discovered file
        config = loader.load_merged()
    """

    def load(self, path: Optional[Path]) -> Config:
        """Load configuration from a TOML file.

        Args:
            path: Path to the TOML configuration file, or None to use defaults

        Raises:
            ConfigError: If the file exists but contains invalid TOML
            FileNotFoundError: If the path is specified but file doesn't exist
        """
        if path is None:
            return Config()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        return Config.from_dict(self._read(path), path=path)

    def _read(self, path: Path) -> dict:
        try:
            data = tomli.loads(path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            line = self._extract_line_number(str(e))
            raise ConfigError(str(e), line=line, path=path) from e
        logger.debug("Loaded configuration from %s", path)
        return data

    def _extract_line_number(self, error_message: str) -> Optional[int]:
        # tomli error messages read "... (at line N, column M)"
        match = re.search(r"line (\d+)", error_message, re.IGNORECASE)
        if match:
            return int(match.group(1))
        return None

    def find_git_root(self, start_path: Path) -> Optional[Path]:
        """Return the closest directory at or above start_path holding .git.

        A .git file counts too (worktrees, submodules). SCMFILTER_GIT_ROOT,
        when set, is returned unchecked.
        """
        env_override = os.environ.get(GIT_ROOT_ENV)
        if env_override:
            return Path(env_override)

        return next(
            (d for d in (start_path, *start_path.parents) if (d / ".git").exists()),
            None,
        )

    def discover_configs(self, start_path: Optional[Path] = None) -> list[Path]:
        """Discover configuration files in order of precedence.

        Precedence order (lowest to highest):
        1. User config: ~/.config/scmfilter/config.toml
        2. Git root: <git_root>/scmfilter.toml
        3. Local (start_path): <start_path>/scmfilter.toml

        Returns:
            List of existing config file paths in precedence order (lowest first).
        """
        if start_path is None:
            start_path = Path.cwd()
        else:
            start_path = Path(start_path).resolve()

        candidates = [
            Path(os.path.expanduser("~")) / ".config" / "scmfilter" / "config.toml",
        ]
        git_root = self.find_git_root(start_path)
        if git_root:
            candidates.append(git_root / CONFIG_FILENAME)
        candidates.append(start_path / CONFIG_FILENAME)

        configs: list[Path] = []
        seen: set[Path] = set()
        for candidate in candidates:
            if not candidate.exists():
                continue
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            configs.append(candidate)

        return configs

    def load_merged(self, start_path: Optional[Path] = None) -> Config:
        """Load and merge configuration from all discovered config files.

        Later (higher precedence) files override earlier ones. Tables are
        merged recursively; arrays such as ``traits`` are replaced entirely.

        Raises:
            ConfigError: If any config file contains invalid TOML.
        """
        merged_data: dict = {}
        for config_path in self.discover_configs(start_path):
            merged_data = self._deep_merge(merged_data, self._read(config_path))

        return Config.from_dict(merged_data)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
