"""Core: modello, sessione, scheduler e facade del sandbox."""

from dynalab.core.component import ModelVariant
from dynalab.core.errors import ModelContractError, UnknownParameterError, UnknownVariantError
from dynalab.core.history import HistoryBuffer, HistorySample
from dynalab.core.metric import MetricEvaluator
from dynalab.core.parameters import ParameterStore
from dynalab.core.scheduler import (
    AsyncioTaskHost,
    CancellationToken,
    ManualTaskHost,
    Scheduler,
    TaskHost,
)
from dynalab.core.session import SimulationSession, Status
from dynalab.core.signals import ParameterSpec
from dynalab.core.system import Sandbox, SandboxView

__all__ = [
    "ModelVariant",
    "ParameterSpec",
    "ParameterStore",
    "HistoryBuffer",
    "HistorySample",
    "MetricEvaluator",
    "SimulationSession",
    "Status",
    "Scheduler",
    "TaskHost",
    "ManualTaskHost",
    "AsyncioTaskHost",
    "CancellationToken",
    "Sandbox",
    "SandboxView",
    "ModelContractError",
    "UnknownParameterError",
    "UnknownVariantError",
]
