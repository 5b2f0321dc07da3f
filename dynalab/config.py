"""Run configuration supplied by the host: step size, horizon, integrator."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

DEFAULT_CAPACITY = 800

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """
    Per-run options read by the scheduler at every tick.

    Attributes:
        dt: integration step (must be > 0 to make progress).
        horizon: simulated end time; the run completes once time >= horizon.
        method: integrator name ('rk4', 'heun', 'midpoint', 'euler').
        tick_interval: wall-clock seconds between live ticks (asyncio host).
        history_capacity: number of samples kept for display.
    """

    dt: float = 0.05
    horizon: float = 20.0
    method: str = "rk4"
    tick_interval: float = 1.0 / 60.0
    history_capacity: int = DEFAULT_CAPACITY

    @property
    def degenerate(self) -> bool:
        """True when no step can ever execute."""
        return self.dt <= 0 or self.horizon <= 0

    def replace(self, **overrides: Any) -> "RunConfig":
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RunConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown run options: %s", unknown)
        return cls(**{k: v for k, v in data.items() if k in known})
