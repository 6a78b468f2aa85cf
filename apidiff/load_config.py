"""Logic for loading and merging comparison configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from apidiff.api_diff_error import ApiDiffError
from apidiff.deep_merge import deep_merge

SUPPORTED_FORMATS = ("markdown", "html", "text")

DEFAULT_CONFIG: dict[str, Any] = {
    "title": "API diff",
    "formats": ["markdown"],
    # regular expressions matched against "<Namespace>.<Type>: Added ..."
    "ignore_new": [],
    # regular expressions matched against "<Namespace>.<Type>: Removed ..."
    "ignore_removed": [],
    "ignore_nonbreaking": False,
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as exc:
                msg = f"Invalid configuration file '{p}': {exc}"
                raise ApiDiffError(msg) from exc
            if not isinstance(user_config, dict):
                msg = f"Configuration file '{p}' must contain a mapping"
                raise ApiDiffError(msg)
            config = deep_merge(config, user_config)

    unknown = [f for f in config["formats"] if f not in SUPPORTED_FORMATS]
    if unknown:
        msg = f"Unsupported report formats: {', '.join(unknown)}"
        raise ApiDiffError(msg)
    return config
