"""Orchestration of a single linking pass over a workspace."""

import logging

from workspace_bins.build_catalog import build_catalog
from workspace_bins.discover_projects import discover_projects
from workspace_bins.linker_config import LinkerConfig
from workspace_bins.materialize import LinkMaterializer
from workspace_bins.plan_links import approved, plan_links, resolve_collisions
from workspace_bins.run_batch import run_batch
from workspace_bins.run_report import RunReport

logger = logging.getLogger(__name__)


def run_linking(config: LinkerConfig, report: RunReport) -> RunReport:
    """Discover, catalogue, plan and materialize; fill ``report`` as it goes."""
    projects = discover_projects(config)
    report.add_projects(projects)
    if not projects:
        logger.warning(
            "No child projects with %s under %s", config.descriptor_name, config.root
        )

    catalog = build_catalog(config)
    report.add_catalog(catalog)

    decisions = resolve_collisions(
        plan_links(projects, catalog, force=config.force_binaries),
        config.binaries_dir,
    )
    report.add_decisions(decisions)

    to_write = approved(decisions)
    materializer = LinkMaterializer(
        config.binaries_dir,
        use_symlinks=config.use_symlinks,
        create_commands=config.create_commands,
        dry_run=config.dry_run,
    )
    logger.info(
        "Materializing %d of %d pairs using %s",
        len(to_write),
        len(decisions),
        materializer.strategy,
    )
    outcomes = run_batch(materializer.materialize, to_write, config.concurrency)
    report.add_outcomes(outcomes)
    return report
