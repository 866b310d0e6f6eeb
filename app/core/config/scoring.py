from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

SCORING_CONFIG_RESOURCE = "scoring.yaml"
REQUIRED_SECTIONS = ("structure", "quality", "length", "composite", "normalization")


def scoring_config_source() -> Path | Traversable:
    """SCORING_CONFIG_PATH when set, otherwise the scoring.yaml shipped inside app.core.config."""
    override = (os.getenv("SCORING_CONFIG_PATH") or "").strip()
    if override:
        return Path(override)
    return resources.files("app.core.config").joinpath(SCORING_CONFIG_RESOURCE)


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    """Rule weights and thresholds, loaded once and cached.

    Call ``get_scoring_config.cache_clear()`` after changing SCORING_CONFIG_PATH.
    """
    source = scoring_config_source()
    try:
        parsed = yaml.safe_load(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RuntimeError(f"Scoring config not found at '{source}'.") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise RuntimeError(f"Could not load scoring config '{source}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Scoring config '{source}' must be a mapping at the top level.")
    missing = [section for section in REQUIRED_SECTIONS if not isinstance(parsed.get(section), dict)]
    if missing:
        raise RuntimeError(f"Scoring config '{source}' is missing sections: {', '.join(missing)}.")
    return parsed


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a nested value by dot path, e.g. 'structure.points.experience'."""
    node: Any = get_scoring_config()
    for key in (path or "").split("."):
        if not key or not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
