"""Logic for deep merging configuration dictionaries."""

from typing import Any

# Lists under these keys accumulate instead of replacing the defaults.
ADDITIVE_KEYS = frozenset({"ignore_new", "ignore_removed"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays, EXCEPT for the ignore lists.
    - Ignore pattern lists are additive.
    """
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif (
            key in ADDITIVE_KEYS
            and isinstance(value, list)
            and isinstance(result.get(key), list)
        ):
            # Additive merge, deduplicated
            result[key] = list(dict.fromkeys([*result[key], *value]))
        else:
            # Default: Replacement (scalars and other arrays)
            result[key] = value
    return result
