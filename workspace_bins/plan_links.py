"""Decide which (sub-project, binary) pairs need a link."""

import logging
from dataclasses import replace
from collections.abc import Sequence
from pathlib import Path

from workspace_bins.models import BinaryEntry, LinkAction, LinkDecision, SubProject

logger = logging.getLogger(__name__)

REASON_DECLARED = "declared by project"
REASON_FORCED = "forced"
REASON_NOT_DECLARED = "not declared by project"
REASON_SHADOWED = "shadowed by"


def decide(project: SubProject, entry: BinaryEntry, *, force: bool) -> LinkDecision:
    """Skip a pair when the project already depends on the binary's package."""
    if entry.package_name in project.dependency_names:
        if not force:
            return LinkDecision(project, entry, LinkAction.SKIP, REASON_DECLARED)
        return LinkDecision(project, entry, LinkAction.CREATE, REASON_FORCED)
    return LinkDecision(project, entry, LinkAction.CREATE, REASON_NOT_DECLARED)


def plan_links(
    projects: Sequence[SubProject],
    catalog: Sequence[BinaryEntry],
    *,
    force: bool = False,
) -> list[LinkDecision]:
    """Return one decision for every project and catalog entry pair."""
    return [
        decide(project, entry, force=force)
        for project in projects
        for entry in catalog
    ]


def find_name_collisions(
    decisions: Sequence[LinkDecision], binaries_dir: str
) -> dict[Path, list[LinkDecision]]:
    """Group CREATE decisions that would write the same link path."""
    by_path: dict[Path, list[LinkDecision]] = {}
    for decision in decisions:
        if decision.action is LinkAction.CREATE:
            by_path.setdefault(decision.link_path(binaries_dir), []).append(decision)
    return {path: group for path, group in by_path.items() if len(group) > 1}


def resolve_collisions(
    decisions: Sequence[LinkDecision], binaries_dir: str
) -> list[LinkDecision]:
    """Mark every CREATE decision but the last for a link path as shadowed.

    Later catalog entries win, so the result does not depend on the order in
    which concurrent writes would have landed. All decisions are returned,
    in their original order.
    """
    resolved = list(decisions)
    for path, group in find_name_collisions(decisions, binaries_dir).items():
        winner = group[-1].entry.package_name
        logger.warning(
            "%s is declared by several packages (%s); using %s",
            path,
            ", ".join(d.entry.package_name for d in group),
            winner,
        )
        for loser in group[:-1]:
            index = next(i for i, d in enumerate(resolved) if d is loser)
            resolved[index] = replace(
                loser, reason=f"{REASON_SHADOWED} {winner}", shadowed_by=winner
            )
    return resolved


def approved(decisions: Sequence[LinkDecision]) -> list[LinkDecision]:
    """Return the decisions that produce link artifacts."""
    return [d for d in decisions if d.writes_link]
