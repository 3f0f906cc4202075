"""Shared fixtures for building throwaway workspaces."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from workspace_bins.linker_config import LinkerConfig, build_linker_config
from workspace_bins.load_config import DEFAULT_CONFIG
from workspace_bins.platform_profile import POSIX_PROFILE


def write_json(path: Path, data: dict[str, Any]) -> Path:
    """Write ``data`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace with two child projects and three installed dependencies.

    - ``jest`` declares a single ``bin`` string.
    - ``typescript`` declares two named binaries.
    - ``@types/node`` declares nothing.
    - ``ghost`` is declared but not installed.
    - ``app`` already depends on ``typescript``; ``lib`` depends on nothing.
    """
    root = tmp_path / "work"
    write_json(
        root / "package.json",
        {
            "name": "work",
            "dependencies": {"typescript": "^5.0.0"},
            "devDependencies": {"jest": "^29.0.0", "@types/node": "^20.0.0"},
            "localDependencies": {"ghost": "file:../ghost"},
        },
    )
    modules = root / "node_modules"
    write_json(
        modules / "jest" / "package.json", {"name": "jest", "bin": "bin/jest.js"}
    )
    write_json(
        modules / "typescript" / "package.json",
        {
            "name": "typescript",
            "bin": {"tsc": "./bin/tsc", "tsserver": "./bin/tsserver"},
        },
    )
    write_json(modules / "@types" / "node" / "package.json", {"name": "@types/node"})

    write_json(
        root / "app" / "package.json",
        {"name": "app", "dependencies": {"typescript": "^5.0.0"}},
    )
    write_json(root / "lib" / "package.json", {"name": "lib"})
    (root / "docs").mkdir()
    (root / "README.md").write_text("readme", encoding="utf-8")
    return root


@pytest.fixture
def make_config() -> Callable[..., LinkerConfig]:
    """Build a POSIX-profile config for a root, with keyword overrides."""

    def _make(root: Path, **overrides: Any) -> LinkerConfig:
        return build_linker_config(root, DEFAULT_CONFIG, POSIX_PROFILE, **overrides)

    return _make
