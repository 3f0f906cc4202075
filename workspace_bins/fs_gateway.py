"""Filesystem primitives used by the linker.

Every failure is translated into one of the linker's own error types so the
command line front end can report it without a traceback.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from workspace_bins.errors import (
    DescriptorError,
    LinkError,
    WorkspaceReadError,
    WriteError,
)

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def list_dir(path: Path) -> list[str]:
    """Return the names of the entries directly inside ``path``."""
    try:
        return os.listdir(path)
    except OSError as e:
        msg = f"Cannot list directory {path}: {e.strerror or e}"
        raise WorkspaceReadError(msg) from e


def is_dir(path: Path) -> bool:
    """Check whether ``path`` is a directory, following symlinks."""
    try:
        return path.is_dir()
    except OSError:
        return False


def read_json(path: Path) -> dict[str, Any]:
    """Read a UTF-8 JSON object from ``path``."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DescriptorError(path, e.strerror or str(e)) from e
    except ValueError as e:
        raise DescriptorError(path, str(e)) from e
    if not isinstance(data, dict):
        raise DescriptorError(path, "top-level value is not an object")
    return data


def ensure_directory(path: Path) -> None:
    """Create ``path`` and any missing ancestors; no-op if it already exists."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(path, e.strerror or str(e)) from e


def _exists(path: Path) -> bool:
    # lexists so a dangling symlink left by an earlier run is also replaced
    return os.path.lexists(path)


def delete_then_write(path: Path, content: str, mode: int = EXECUTABLE_MODE) -> None:
    """Replace ``path`` with ``content`` and set its permission bits.

    The file is removed first when it exists, then written. This is not an
    atomic replace: a crash between the two steps leaves no file behind.
    """
    try:
        if _exists(path):
            logger.info("Deleting file %s", path)
            path.unlink()
        # newline="" keeps the template's own line terminators byte-exact
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
        path.chmod(mode)
    except OSError as e:
        raise WriteError(path, e.strerror or str(e)) from e


def create_symlink(target: Path, link_path: Path) -> None:
    """Point ``link_path`` at ``target`` using a path relative to the link.

    Any existing entry at ``link_path`` is removed first.
    """
    try:
        relative = os.path.relpath(target, link_path.parent)
    except ValueError:
        # different drives on Windows
        relative = str(target)
    try:
        if _exists(link_path):
            logger.info("Deleting file %s", link_path)
            link_path.unlink()
        os.symlink(relative, link_path)
    except OSError as e:
        raise LinkError(link_path, target, e.strerror or str(e)) from e
