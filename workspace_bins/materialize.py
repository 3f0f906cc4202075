"""Write the link artifacts for approved decisions."""

import logging
import os
from pathlib import Path

from workspace_bins.fs_gateway import (
    create_symlink,
    delete_then_write,
    ensure_directory,
)
from workspace_bins.models import LinkAction, LinkDecision, LinkOutcome
from workspace_bins.wrapper_templates import render_posix_script, render_windows_command

logger = logging.getLogger(__name__)

COMMAND_SUFFIX = ".cmd"


def relative_target(link_path: Path, target: Path) -> str:
    """Return ``target`` relative to the link's directory, with ``/`` separators."""
    try:
        rel = os.path.relpath(target, link_path.parent)
    except ValueError:
        # different drives on Windows
        rel = str(target)
    return rel.replace(os.sep, "/")


class LinkMaterializer:
    """Creates symlinks or wrapper scripts inside each sub-project's binaries dir.

    The strategy is fixed for the lifetime of the materializer.
    """

    def __init__(
        self,
        binaries_dir: str,
        *,
        use_symlinks: bool,
        create_commands: bool,
        dry_run: bool = False,
    ) -> None:
        """Fix the binaries dir and strategy used for every decision."""
        self.binaries_dir = binaries_dir
        self.use_symlinks = use_symlinks
        self.create_commands = create_commands
        self.dry_run = dry_run

    @property
    def strategy(self) -> str:
        """Name of the strategy applied to every pair."""
        if self.dry_run:
            return "dry-run"
        return "symlink" if self.use_symlinks else "script"

    def artifact_paths(self, decision: LinkDecision) -> list[Path]:
        """List the files the decision produces, without touching the disk."""
        link_path = decision.link_path(self.binaries_dir)
        if self.use_symlinks or not self.create_commands:
            return [link_path]
        return [link_path, link_path.with_name(link_path.name + COMMAND_SUFFIX)]

    def materialize(self, decision: LinkDecision) -> LinkOutcome:
        """Create the link artifacts for one CREATE decision."""
        if decision.action is not LinkAction.CREATE:
            msg = f"Cannot materialize a {decision.action.value} decision"
            raise ValueError(msg)
        if decision.shadowed_by is not None:
            msg = f"Cannot materialize a decision {decision.reason}"
            raise ValueError(msg)

        artifacts = self.artifact_paths(decision)
        if self.dry_run:
            return LinkOutcome(decision, self.strategy, artifacts)

        link_path = artifacts[0]
        ensure_directory(link_path.parent)
        target = decision.entry.target

        if self.use_symlinks:
            create_symlink(target, link_path)
            logger.debug("Linked %s -> %s", link_path, target)
            return LinkOutcome(decision, self.strategy, artifacts)

        rel = relative_target(link_path, target)
        delete_then_write(link_path, render_posix_script(rel))
        if self.create_commands:
            delete_then_write(artifacts[1], render_windows_command(rel))
        logger.debug("Wrote wrapper %s for %s", link_path, rel)
        return LinkOutcome(decision, self.strategy, artifacts)
