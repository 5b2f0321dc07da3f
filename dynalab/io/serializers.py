"""Save and load run configurations and parameter presets as JSON."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from dynalab.config import RunConfig


def _convert(d: Any) -> Any:
    """Convert numpy values (recursively) to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Union[Dict[str, Any], RunConfig], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict or RunConfig) to JSON.
    Numpy arrays and scalars are converted to plain lists/numbers.
    """
    if isinstance(config, RunConfig):
        config = config.to_dict()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_run_config(path: Union[str, Path]) -> RunConfig:
    """Load a JSON file into a RunConfig (unknown keys are ignored)."""
    return RunConfig.from_dict(load_config(path))
