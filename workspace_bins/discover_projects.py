"""Find the sub-projects that sit directly under the workspace root."""

import logging

from workspace_bins.dependency_names import dependency_names
from workspace_bins.fs_gateway import is_dir, list_dir, read_json
from workspace_bins.linker_config import LinkerConfig
from workspace_bins.models import SubProject

logger = logging.getLogger(__name__)


def discover_projects(config: LinkerConfig) -> list[SubProject]:
    """Return every immediate child directory that holds a package descriptor.

    The order follows the directory listing. A descriptor that exists but
    cannot be parsed aborts discovery.
    """
    projects: list[SubProject] = []
    for name in list_dir(config.root):
        if name in config.exclude_dirs:
            continue
        path = config.root / name
        if not is_dir(path):
            continue
        if config.descriptor_name not in list_dir(path):
            continue

        descriptor = read_json(path / config.descriptor_name)
        names = dependency_names(descriptor, config.dependency_fields)
        logger.debug("Project %s declares %d dependencies", name, len(names))
        projects.append(
            SubProject(relative_name=name, path=path, dependency_names=frozenset(names))
        )
    return projects
