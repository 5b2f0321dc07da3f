"""Mutable state of one simulation run."""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dynalab.core.component import ModelVariant, State
from dynalab.core.history import DEFAULT_CAPACITY, HistoryBuffer

_session_ids = itertools.count(1)


class Status(str, Enum):
    """Run status, valued with the strings shown to the user."""

    IDLE = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(eq=False)
class SimulationSession:
    """
    One run of one variant: state, elapsed time, step count, status, history.

    Sessions are replaced, never rewound: reset and variant switch build a
    new one, so a stale tick can detect it by identity.
    """

    variant: ModelVariant
    state: State
    time: float = 0.0
    step: int = 0
    status: Status = Status.IDLE
    history: HistoryBuffer = field(default_factory=HistoryBuffer)
    metric: Optional[float] = None
    error: Optional[str] = None
    session_id: int = field(default_factory=lambda: next(_session_ids))

    @classmethod
    def start(cls, variant: ModelVariant, capacity: int = DEFAULT_CAPACITY) -> "SimulationSession":
        """Fresh Idle session at the variant's initial state."""
        return cls(
            variant=variant,
            state=variant.initial_state,
            history=HistoryBuffer(capacity),
        )

    @property
    def running(self) -> bool:
        return self.status is Status.RUNNING
