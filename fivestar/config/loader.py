import copy
from pathlib import Path
from typing import Optional

import yaml

from .defaults import DEFAULT_CONFIG
from fivestar.utils.logger import get_logger

logger = get_logger(__name__)


def _read_overrides(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Threshold file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise ValueError(f"{path}: threshold overrides must be a YAML mapping")

    return overrides


def load_config(path: Optional[str] = None) -> dict:
    """
    Engine constants, optionally overridden from a YAML file.

    A deployment usually overrides a handful of numbers (a new CMS
    breakpoint year, a different repeat multiplier) and nothing else, so
    each top-level section of the file is merged into its default
    section one level deep. A section that is not a mapping in both
    places replaces the default outright. ``DEFAULT_CONFIG`` itself is
    never modified.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config

    overrides = _read_overrides(Path(path))
    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    logger.info("Applied threshold overrides from %s: %s", path, ", ".join(map(str, overrides)) or "none")
    return config
