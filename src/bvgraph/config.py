"""Analysis configuration: defaults, discovery and loading of .bvgraph.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from bvgraph.exit_codes import ConfigError
from bvgraph.graph.pagerank import EigenvectorConfig, HITSConfig, PageRankConfig

log = logging.getLogger(__name__)

CONFIG_NAME = ".bvgraph.json"
CONFIG_ENV = "BVGRAPH_CONFIG"


@dataclass
class AnalysisConfig:
    """Defaults for every tunable algorithm parameter.

    ``betweenness_sample_size`` of 0 means "let ``recommend_sample_size``
    decide".
    """

    damping: float = 0.85
    tolerance: float = 1e-6
    max_iterations: int = 100
    eigenvector_iterations: int = 50
    betweenness_sample_size: int = 0
    betweenness_seed: int | None = None
    coverage_limit: int = 10
    max_cycles: int = 100
    cycle_break_limit: int = 5
    topk: int = 5

    def pagerank_config(self) -> PageRankConfig:
        return PageRankConfig(
            damping=self.damping,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )

    def eigenvector_config(self) -> EigenvectorConfig:
        return EigenvectorConfig(iterations=self.eigenvector_iterations, tolerance=self.tolerance)

    def hits_config(self) -> HITSConfig:
        return HITSConfig(tolerance=self.tolerance, max_iterations=self.max_iterations)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_FLOAT_KEYS = {"damping", "tolerance"}
_OPTIONAL_KEYS = {"betweenness_seed"}


def find_config_root(start: str = ".") -> Path | None:
    """Walk up from *start* looking for a .bvgraph.json file.

    Returns the directory containing the config, or None.
    """
    current = Path(start).resolve()
    while True:
        if (current / CONFIG_NAME).exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def _validate_config(cfg: Any) -> None:
    if not isinstance(cfg, dict):
        raise ConfigError("Config must be a JSON object")
    known = {f.name for f in fields(AnalysisConfig)}
    for key, value in cfg.items():
        if key not in known:
            raise ConfigError(f"Unknown config key '{key}'")
        if value is None and key in _OPTIONAL_KEYS:
            continue
        if isinstance(value, bool):
            raise ConfigError(f"Config key '{key}' must be a number")
        if key in _FLOAT_KEYS:
            if not isinstance(value, (int, float)):
                raise ConfigError(f"Config key '{key}' must be a number")
        elif not isinstance(value, int):
            raise ConfigError(f"Config key '{key}' must be an integer")


def load_config(path: str | Path | None = None) -> AnalysisConfig:
    """Load analysis settings.

    Resolution order: explicit *path*, the ``BVGRAPH_CONFIG`` environment
    variable, then the nearest .bvgraph.json above the working directory.
    Returns the defaults when none is found.  Raises ConfigError on an
    unreadable or invalid file.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV) or None
    if path is None:
        root = find_config_root()
        if root is None:
            return AnalysisConfig()
        path = root / CONFIG_NAME

    config_path = Path(path)
    try:
        cfg = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"No config at {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    _validate_config(cfg)
    log.info("Loaded analysis config from %s", config_path)
    try:
        config = AnalysisConfig(**cfg)
        # Surface range errors (damping, negative counts) at load time
        config.pagerank_config()
        config.eigenvector_config()
    except ValueError as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc
    return config


def save_config(root: Path, config: AnalysisConfig) -> Path:
    """Write *config* as .bvgraph.json to *root*; returns the written path."""
    config_path = root / CONFIG_NAME
    config_path.write_text(
        json.dumps(config.to_dict(), indent=2) + "\n",
        encoding="utf-8",
    )
    return config_path
