"""Extract declared dependency names from a package descriptor."""

from collections.abc import Iterable
from typing import Any


def dependency_names(descriptor: dict[str, Any], fields: Iterable[str]) -> list[str]:
    """Union the keys of every dependency mapping named in ``fields``.

    Versions are ignored. Names keep their first-seen order so that later
    stages behave the same from one run to the next.
    """
    seen: dict[str, None] = {}
    for field in fields:
        section = descriptor.get(field)
        if not isinstance(section, dict):
            continue
        for name in section:
            seen.setdefault(str(name), None)
    return list(seen)
