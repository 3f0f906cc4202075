"""Platform-dependent defaults, selected once per run."""

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformProfile:
    """Defaults that differ between Windows and POSIX hosts."""

    name: str
    use_symlinks: bool
    create_commands: bool


POSIX_PROFILE = PlatformProfile(name="posix", use_symlinks=True, create_commands=False)
WINDOWS_PROFILE = PlatformProfile(
    name="windows", use_symlinks=False, create_commands=True
)


def select_platform_profile(platform: str | None = None) -> PlatformProfile:
    """Pick the profile for ``platform`` (defaults to ``sys.platform``).

    Anything that is not Windows is treated as POSIX.
    """
    platform = sys.platform if platform is None else platform
    if platform == "win32":
        return WINDOWS_PROFILE
    return POSIX_PROFILE
