"""Exception types raised while linking workspace binaries."""

from pathlib import Path


class WorkspaceBinsError(Exception):
    """Base class for every failure the linker reports."""


class WorkspaceReadError(WorkspaceBinsError):
    """A workspace or sub-project directory could not be read."""


class DescriptorError(WorkspaceReadError):
    """A package descriptor is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Record the offending descriptor path and the underlying reason."""
        super().__init__(f"Cannot read package descriptor {path}: {reason}")
        self.path = path
        self.reason = reason


class DependencyResolutionMiss(WorkspaceBinsError):
    """A declared dependency has no installed descriptor to read binaries from."""

    def __init__(self, dependency: str, reason: str) -> None:
        """Record which dependency could not be resolved."""
        super().__init__(f"Dependency {dependency!r} not resolved: {reason}")
        self.dependency = dependency


class LinkError(WorkspaceBinsError):
    """The platform refused to create a symbolic link."""

    def __init__(self, link_path: Path, target: Path, reason: str) -> None:
        """Record the link location and the target it should point to."""
        super().__init__(f"Cannot link {link_path} -> {target}: {reason}")
        self.link_path = link_path
        self.target = target


class WriteError(WorkspaceBinsError):
    """A wrapper script or command file could not be deleted or written."""

    def __init__(self, path: Path, reason: str) -> None:
        """Record the artifact path that failed."""
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path


class ConfigError(WorkspaceBinsError):
    """The YAML configuration file is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Record the config file path and the parser's complaint."""
        super().__init__(f"Invalid configuration file {path}: {reason}")
        self.path = path
