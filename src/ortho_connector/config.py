"""
Configuration file support for ortho-connector.

Provides hierarchical configuration loading from:
1. Project config: .ortho-connector.toml or ortho-connector.toml in project root
2. User config: ~/.config/ortho-connector/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from ortho_connector.exceptions import ConfigurationError
from ortho_connector.router.rules import RoutingRules

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".ortho-connector.toml", "ortho-connector.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "ortho-connector" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose"},
    "route": {
        "min_dist",
        "basic_cost",
        "turn_penalty",
        "cost_factor_separate",
        "cost_factor_intersect",
        "walk_margin",
    },
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "table"
    verbose: bool = False


@dataclass
class RouteConfig:
    """Routing configuration."""

    min_dist: float = 20.0
    basic_cost: float = 1.0
    turn_penalty: float = 0.02
    cost_factor_separate: float = 5.0
    cost_factor_intersect: float = 2.0
    walk_margin: float = 1.0

    def to_rules(self) -> RoutingRules:
        """Build routing rules, rejecting values the router cannot use."""
        if self.min_dist < 0:
            raise ConfigurationError(
                "Invalid clearance distance",
                context={"route.min_dist": self.min_dist},
                suggestions=["Use a non-negative min_dist"],
            )
        if self.basic_cost <= 0:
            raise ConfigurationError(
                "Invalid basic cell cost",
                context={"route.basic_cost": self.basic_cost},
                suggestions=["Use a positive basic_cost so the search heuristic stays meaningful"],
            )
        return RoutingRules(
            min_dist=self.min_dist,
            basic_cost=self.basic_cost,
            turn_penalty=self.turn_penalty,
            cost_factor_separate=self.cost_factor_separate,
            cost_factor_intersect=self.cost_factor_intersect,
            walk_margin=self.walk_margin,
        )


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    route: RouteConfig = field(default_factory=RouteConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def items(self) -> list[tuple[str, Any]]:
        """Flattened ``section.key`` / value pairs."""
        result = []
        for section in KNOWN_KEYS:
            section_obj = getattr(self, section)
            for f in fields(section_obj):
                result.append((f"{section}.{f.name}", getattr(section_obj, f.name)))
        return result


class ConfigError(ConfigurationError):
    """Configuration file errors."""


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file safely.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data or None when no TOML parser is available

    Raises:
        ConfigError: If TOML is invalid or unreadable
    """
    if tomllib is None:
        warnings.warn(
            "tomli package not installed. Config file support requires 'pip install tomli' for Python < 3.11.",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        _warn_unknown_keys(section_data, known, section, source)

        section_obj = getattr(config, section)
        for key in sorted(known):
            if key in section_data:
                setattr(section_obj, key, section_data[key])
                sources[f"{section}.{key}"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# ortho-connector configuration file
# Place as .ortho-connector.toml in project root or ~/.config/ortho-connector/config.toml for user defaults

[defaults]
# Output format: table, json
# format = "table"

# Enable verbose (debug) logging by default
# verbose = false

[route]
# Clearance between a connector and its shapes, in scene units
# min_dist = 20

# Cost of entering any grid cell
# basic_cost = 1.0

# Extra cost per bend; keep it small so it only breaks ties
# turn_penalty = 0.02

# Padding/shape cell weight when the shapes are apart
# cost_factor_separate = 5.0

# Padding/shape cell weight when the shapes overlap and face each other
# cost_factor_intersect = 2.0

# Padding boxes are shrunk by this much before walkability checks
# walk_margin = 1.0
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
