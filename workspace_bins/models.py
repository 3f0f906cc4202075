"""Data models shared by discovery, cataloguing, planning and materialization."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class SubProject:
    """An immediate child directory of the workspace holding a package descriptor."""

    relative_name: str
    path: Path
    dependency_names: frozenset[str] = frozenset()


@dataclass(frozen=True)
class BinaryEntry:
    """An executable declared by one of the workspace root's dependencies."""

    package_name: str
    executable_name: str
    target: Path  # absolute path inside the workspace's modules dir


class LinkAction(Enum):
    """What the planner decided for a (sub-project, binary) pair."""

    CREATE = "create"
    SKIP = "skip"


@dataclass(frozen=True)
class LinkDecision:
    """Planner verdict for one sub-project and one catalog entry."""

    project: SubProject
    entry: BinaryEntry
    action: LinkAction
    reason: str
    shadowed_by: str | None = None  # package whose same-named binary wins

    @property
    def writes_link(self) -> bool:
        """Whether the materializer should produce artifacts for this pair."""
        return self.action is LinkAction.CREATE and self.shadowed_by is None

    def link_path(self, binaries_dir: str) -> Path:
        """Return where the link for this pair lives inside the sub-project."""
        return self.project.path / binaries_dir / self.entry.executable_name


@dataclass
class LinkOutcome:
    """Artifacts written for one approved decision."""

    decision: LinkDecision
    strategy: str  # "symlink", "script" or "dry-run"
    artifacts: list[Path] = field(default_factory=list)
