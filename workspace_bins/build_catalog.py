"""Build the catalog of executables exposed by the workspace root's dependencies."""

import logging

from workspace_bins.bin_declaration import binary_entries, decode_bin_declaration
from workspace_bins.dependency_names import dependency_names
from workspace_bins.errors import DependencyResolutionMiss, DescriptorError
from workspace_bins.fs_gateway import read_json
from workspace_bins.linker_config import LinkerConfig
from workspace_bins.models import BinaryEntry
from workspace_bins.run_batch import run_batch

logger = logging.getLogger(__name__)


def _resolve_dependency(config: LinkerConfig, name: str) -> list[BinaryEntry]:
    """Read one installed dependency's descriptor and list its executables."""
    package_root = config.root / config.modules_dir / name
    try:
        descriptor = read_json(package_root / config.descriptor_name)
    except DescriptorError as e:
        raise DependencyResolutionMiss(name, e.reason) from e

    declaration = decode_bin_declaration(descriptor)
    if declaration is None:
        raise DependencyResolutionMiss(name, "no executables declared")

    published = descriptor.get("name")
    return binary_entries(
        name,
        package_root,
        declaration,
        published_name=published if isinstance(published, str) else None,
    )


def _entries_or_nothing(config: LinkerConfig, name: str) -> list[BinaryEntry]:
    try:
        return _resolve_dependency(config, name)
    except DependencyResolutionMiss as e:
        # Type-only or not-yet-installed dependencies are expected
        logger.debug("%s", e)
        return []


def build_catalog(config: LinkerConfig) -> list[BinaryEntry]:
    """Return one entry per executable declared by the root's dependencies.

    The root descriptor must be readable. Dependencies are resolved
    concurrently; the catalog keeps the root's declaration order.
    """
    root_descriptor = read_json(config.root / config.descriptor_name)
    names = dependency_names(root_descriptor, config.dependency_fields)
    logger.debug("Workspace root declares %d dependencies", len(names))

    per_dependency = run_batch(
        lambda name: _entries_or_nothing(config, name), names, config.concurrency
    )
    return [entry for entries in per_dependency for entry in entries]
