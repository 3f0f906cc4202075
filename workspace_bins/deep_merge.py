"""Logic for deep merging configuration dictionaries."""

from typing import Any

ADDITIVE_KEYS = {"exclude_dirs"}


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays and scalars in 'update' replace those in 'base'.
    - 'exclude_dirs' is additive; a single string counts as a one-item list.
    """
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in ADDITIVE_KEYS and isinstance(result.get(key), list):
            if value is None:
                continue
            if isinstance(value, str):
                value = [value]
            if isinstance(value, list):
                # Keep the built-in exclusions; users can only add to them
                result[key] = sorted(set(result[key]) | set(value))
            else:
                result[key] = value
        else:
            result[key] = value
    return result
