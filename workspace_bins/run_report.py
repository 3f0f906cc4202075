"""Human-readable and JSON summaries of a linking run."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from workspace_bins.models import (
    BinaryEntry,
    LinkAction,
    LinkDecision,
    LinkOutcome,
    SubProject,
)


class RunReport:
    """Collects what one run found, decided and wrote."""

    def __init__(self, config_hash: str) -> None:
        """Start an empty report for a run using the given configuration."""
        self.config_hash = config_hash
        self.projects: list[SubProject] = []
        self.catalog: list[BinaryEntry] = []
        self.decisions: list[LinkDecision] = []
        self.outcomes: list[LinkOutcome] = []
        self.start_time = time.time()

    def add_projects(self, projects: list[SubProject]) -> None:
        """Record the discovered sub-projects."""
        self.projects.extend(projects)

    def add_catalog(self, catalog: list[BinaryEntry]) -> None:
        """Record the catalog entries."""
        self.catalog.extend(catalog)

    def add_decisions(self, decisions: list[LinkDecision]) -> None:
        """Record every planner decision, including skips."""
        self.decisions.extend(decisions)

    def add_outcomes(self, outcomes: list[LinkOutcome]) -> None:
        """Record what the materializer wrote."""
        self.outcomes.extend(outcomes)

    def packages_with_binaries(self) -> list[str]:
        """Unique owning packages, in catalog order."""
        return list(dict.fromkeys(e.package_name for e in self.catalog))

    def summary_lines(self, *, verbose: bool = False) -> list[str]:
        """Render the summary printed at the end of a run."""
        lines = [
            "Child projects found: "
            + ", ".join(p.relative_name for p in self.projects),
            "Dependencies with binaries found: "
            + ", ".join(self.packages_with_binaries()),
        ]
        outcomes_by_project: dict[Path, list[LinkOutcome]] = {}
        for outcome in self.outcomes:
            outcomes_by_project.setdefault(outcome.decision.project.path, []).append(
                outcome
            )

        for project in self.projects:
            own = [d for d in self.decisions if d.project.path == project.path]
            skipped = sum(1 for d in own if d.action is LinkAction.SKIP)
            written = outcomes_by_project.get(project.path, [])
            shadowed = sum(1 for d in own if d.shadowed_by is not None)
            line = f"{project.relative_name}: linked {len(written)}, skipped {skipped}"
            if shadowed:
                line += f", shadowed {shadowed}"
            lines.append(line)
            if verbose:
                for outcome in written:
                    lines.extend(
                        f"  {outcome.strategy} {artifact}"
                        for artifact in outcome.artifacts
                    )
        return lines

    def generate_report(self, path: str | Path) -> None:
        """Write the JSON form of the report to ``path``."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "total_projects": len(self.projects),
                "total_binaries": len(self.catalog),
                "total_decisions": len(self.decisions),
            },
            "projects": [
                {
                    "name": p.relative_name,
                    "path": str(p.path),
                    "dependencies": sorted(p.dependency_names),
                }
                for p in self.projects
            ],
            "links": [
                {
                    "project": d.project.relative_name,
                    "executable": d.entry.executable_name,
                    "package": d.entry.package_name,
                    "target": str(d.entry.target),
                    "action": d.action.value,
                    "reason": d.reason,
                    "shadowed_by": d.shadowed_by,
                }
                for d in self.decisions
            ],
            "stats": self._compute_stats(),
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        action_counts = Counter(d.action.value for d in self.decisions)
        return {
            "action_counts": dict(action_counts),
            "shadowed": sum(1 for d in self.decisions if d.shadowed_by is not None),
            "artifacts_written": sum(len(o.artifacts) for o in self.outcomes),
        }
