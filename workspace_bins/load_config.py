"""Logic for loading and merging configuration files."""

from pathlib import Path
from typing import Any

import yaml

from workspace_bins.deep_merge import deep_merge
from workspace_bins.errors import ConfigError

CONFIG_FILE_NAME = ".workspace-bins.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "descriptor_name": "package.json",
    "modules_dir": "node_modules",
    "binaries_dir": "node_modules/.bin",
    "dependency_fields": [
        "dependencies",
        "devDependencies",
        "localDependencies",
    ],
    "exclude_dirs": ["node_modules"],
    "concurrency": 8,
    # None means "use the platform default" (or False for force_binaries)
    "use_symlinks": None,
    "create_commands": None,
    "force_binaries": None,
}


def find_config_file(root: Path) -> Path | None:
    """Return the workspace's own config file if it has one."""
    candidate = root / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                raise ConfigError(p, str(e)) from e
            if not isinstance(user_config, dict):
                raise ConfigError(p, "top-level value must be a mapping")
            config = deep_merge(config, user_config)
    return config
