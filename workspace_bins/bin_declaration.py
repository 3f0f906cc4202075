"""Decode the ``bin`` field of a dependency's package descriptor."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from workspace_bins.models import BinaryEntry


@dataclass(frozen=True)
class SingleBin:
    """``"bin": "cli.js"``: one executable named after the package."""

    path: str


@dataclass(frozen=True)
class NamedBins:
    """``"bin": {"a": "x.js"}``: one executable per key."""

    paths: dict[str, str]


BinDeclaration = SingleBin | NamedBins


def decode_bin_declaration(descriptor: dict[str, Any]) -> BinDeclaration | None:
    """Return the typed ``bin`` declaration, or None when there is none."""
    raw = descriptor.get("bin")
    if isinstance(raw, str):
        return SingleBin(raw)
    if isinstance(raw, dict):
        # Non-string values and names that reduce to nothing cannot be linked
        paths: dict[str, str] = {}
        for key, value in raw.items():
            name = safe_executable_name(str(key))
            if name and isinstance(value, str):
                paths[name] = value
        return NamedBins(paths)
    return None


def safe_executable_name(key: str) -> str:
    """Reduce a ``bin`` key to a bare file name (``../../x`` -> ``x``).

    Returns an empty string when nothing usable is left.
    """
    name = key.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    return "" if name in {".", ".."} else name


def executable_name_for_package(package_name: str) -> str:
    """Name a single-bin executable after the package (``@scope/x`` -> ``x``)."""
    return package_name.rsplit("/", 1)[-1]


def _target(package_root: Path, relative: str) -> Path:
    return Path(os.path.normpath(package_root / relative))


def binary_entries(
    package_name: str,
    package_root: Path,
    declaration: BinDeclaration | None,
    published_name: str | None = None,
) -> list[BinaryEntry]:
    """Flatten a declaration into catalog entries owned by ``package_name``.

    ``published_name`` is the descriptor's own ``name`` field; a single-bin
    executable is named after it, falling back to ``package_name``.
    """
    if declaration is None:
        return []
    if isinstance(declaration, SingleBin):
        return [
            BinaryEntry(
                package_name=package_name,
                executable_name=executable_name_for_package(
                    published_name or package_name
                ),
                target=_target(package_root, declaration.path),
            )
        ]
    return [
        BinaryEntry(
            package_name=package_name,
            executable_name=name,
            target=_target(package_root, path),
        )
        for name, path in declaration.paths.items()
    ]
