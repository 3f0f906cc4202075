"""Immutable run settings resolved from defaults, the config file and CLI flags."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from workspace_bins.errors import ConfigError
from workspace_bins.platform_profile import PlatformProfile


@dataclass(frozen=True)
class LinkerConfig:
    """Everything a run needs to know, fixed before any filesystem work starts."""

    root: Path
    descriptor_name: str
    modules_dir: str
    binaries_dir: str
    dependency_fields: tuple[str, ...]
    exclude_dirs: frozenset[str]
    concurrency: int
    use_symlinks: bool
    create_commands: bool
    force_binaries: bool
    dry_run: bool = False

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-ready view, used for hashing and reports."""
        return {
            "root": str(self.root),
            "descriptor_name": self.descriptor_name,
            "modules_dir": self.modules_dir,
            "binaries_dir": self.binaries_dir,
            "dependency_fields": list(self.dependency_fields),
            "exclude_dirs": sorted(self.exclude_dirs),
            "concurrency": self.concurrency,
            "use_symlinks": self.use_symlinks,
            "create_commands": self.create_commands,
            "force_binaries": self.force_binaries,
            "dry_run": self.dry_run,
        }


TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def parse_bool_text(value: str) -> bool | None:
    """Parse ``true``/``false`` style text; None when it is neither."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def _config_bool(root: Path, key: str, value: Any) -> bool | None:
    """Read an optional boolean setting from the YAML config."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        parsed = parse_bool_text(value)
        if parsed is not None:
            return parsed
    msg = f"{key} must be true or false, got {value!r}"
    raise ConfigError(root, msg)


def _as_list(root: Path, key: str, value: Any) -> list[Any]:
    """Accept a single string where a list of strings is expected."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    msg = f"{key} must be a string or a list of strings, got {value!r}"
    raise ConfigError(root, msg)


def _pick(*values: bool | None) -> bool:
    """Return the first value that was actually set."""
    for value in values:
        if value is not None:
            return value
    return False


def build_linker_config(
    root: Path,
    config: dict[str, Any],
    profile: PlatformProfile,
    *,
    use_symlinks: bool | None = None,
    create_commands: bool | None = None,
    force_binaries: bool | None = None,
    concurrency: int | None = None,
    dry_run: bool = False,
) -> LinkerConfig:
    """Resolve CLI overrides over config values over platform defaults."""
    workers = concurrency if concurrency is not None else config.get("concurrency")
    try:
        workers = int(workers) if workers is not None else 1
    except (TypeError, ValueError) as e:
        msg = f"concurrency must be an integer, got {workers!r}"
        raise ConfigError(root, msg) from e

    fields = _as_list(
        root, "dependency_fields", config.get("dependency_fields")
    )

    return LinkerConfig(
        root=root.resolve(),
        descriptor_name=str(config["descriptor_name"]),
        modules_dir=str(config["modules_dir"]),
        binaries_dir=str(config["binaries_dir"]),
        dependency_fields=tuple(str(f) for f in fields),
        exclude_dirs=frozenset(
            str(d) for d in _as_list(root, "exclude_dirs", config.get("exclude_dirs"))
        ),
        concurrency=max(1, workers),
        use_symlinks=_pick(
            use_symlinks,
            _config_bool(root, "use_symlinks", config.get("use_symlinks")),
            profile.use_symlinks,
        ),
        create_commands=_pick(
            create_commands,
            _config_bool(root, "create_commands", config.get("create_commands")),
            profile.create_commands,
        ),
        force_binaries=_pick(
            force_binaries,
            _config_bool(root, "force_binaries", config.get("force_binaries")),
        ),
        dry_run=dry_run,
    )
