"""Loading of per-vault settings from YAML, TOML or JSON files."""

import json
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .discovery import DEFAULT_IGNORE_FILENAME, WalkOptions
from .errors import ConfigError
from .logging import logger
from .traversal import DEFAULT_DOCUMENT_EXTENSIONS


# Looked up in the vault root, first match wins
CONFIG_FILENAMES = (".wlls.yaml", ".wlls.yml", ".wlls.toml", ".wlls.json")


@dataclass(frozen=True)
class Settings:
    """Run settings; command-line flags are applied on top of these."""

    recursive: bool = False
    skip_missing_refs: bool = False
    ignore_file: str = DEFAULT_IGNORE_FILENAME
    include_hidden: bool = False
    gitignore: bool = False
    document_extensions: Tuple[str, ...] = DEFAULT_DOCUMENT_EXTENSIONS

    def walk_options(self) -> WalkOptions:
        """Build the indexer options for these settings."""
        return WalkOptions(
            ignore_filename=self.ignore_file,
            ignore_hidden=not self.include_hidden,
            honor_gitignore=self.gitignore,
        )


BOOL_KEYS = {"recursive", "skip_missing_refs", "include_hidden", "gitignore"}


def parse_file(file_path: Path) -> Any:
    """
    Parse a configuration file and return its contents.

    The format is chosen from the file suffix; unknown suffixes are tried as
    JSON first, then YAML.

    Args:
        file_path: Path to the file to parse.

    Returns:
        Parsed data structure.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(file_path, f"cannot read file: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)

        elif suffix == ".json":
            return json.loads(content)

        elif suffix == ".toml":
            return tomllib.loads(content)

        else:
            try:
                return json.loads(content)
            except json.JSONDecodeError:
                return yaml.safe_load(content)

    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(file_path, f"cannot parse file: {e}") from e


def find_config(vault_root: Path) -> Optional[Path]:
    """Return the first configuration file present in the vault root."""
    for filename in CONFIG_FILENAMES:
        candidate = vault_root / filename
        if candidate.is_file():
            return candidate
    return None


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from a configuration file.

    Args:
        config_path: The file to load. If None, defaults are returned.

    Returns:
        Settings with the file's values applied over the defaults.

    Raises:
        ConfigError: If the file is unreadable or holds invalid settings.
    """
    if config_path is None:
        return Settings()

    logger.debug("Loading settings from %s", config_path)
    data = parse_file(config_path)
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(config_path, "top level must be a mapping")

    return replace(Settings(), **_validate(config_path, data))


def _validate(config_path: Path, data: Dict[str, Any]) -> Dict[str, Any]:
    """Check keys and value types, normalizing where needed."""
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}

    for key, value in data.items():
        # Accept both skip-missing-refs and skip_missing_refs
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(config_path, f"unknown setting '{key}'")

        if name in BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(config_path, f"'{key}' must be true or false")
            values[name] = value

        elif name == "ignore_file":
            if not isinstance(value, str):
                raise ConfigError(config_path, f"'{key}' must be a string")
            values[name] = value

        elif name == "document_extensions":
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
                raise ConfigError(config_path, f"'{key}' must be a list of extensions")
            extensions = []
            for ext in value:
                if not ext.startswith("."):
                    ext = "." + ext
                extensions.append(ext)
            values[name] = tuple(extensions)

    return values
