"""Sandbox facade: variant selection, live parameters and run controls."""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Optional, Tuple

from dynalab.config import RunConfig
from dynalab.core.component import ModelVariant, State
from dynalab.core.history import HistorySample
from dynalab.core.metric import MetricEvaluator
from dynalab.core.parameters import ParameterStore
from dynalab.core.scheduler import ManualTaskHost, Scheduler, TaskHost
from dynalab.core.session import SimulationSession, Status
from dynalab.physics.registry import VariantRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SandboxView:
    """Everything the display layer needs for one frame."""

    variant_id: str
    status: str
    time: float
    step: int
    metric: Optional[float]
    state: State
    parameters: Dict[str, float]
    history: Tuple[HistorySample, ...]
    series_labels: Tuple[str, str]
    error: Optional[str] = None


class Sandbox:
    """
    Interactive sandbox.
    Handles the host's events: select variant -> edit parameters -> run/pause/reset,
    and exposes a SandboxView for the display collaborator.
    """

    def __init__(
        self,
        registry: Optional[VariantRegistry] = None,
        host: Optional[TaskHost] = None,
        config: Optional[RunConfig] = None,
        variant_id: Optional[str] = None,
    ) -> None:
        """
        Args:
            registry: selectable variants (default: built-in models)
            host: repeating-task primitive (default: ManualTaskHost)
            config: run options (dt, horizon, method, ...)
            variant_id: variant selected at start (default: first registered)
        """
        self.registry = registry or default_registry()
        if not len(self.registry):
            raise ValueError("Registry has no variants to select")
        self.host = host or ManualTaskHost()
        self.scheduler = Scheduler(self.host, config)
        self._parameters: Optional[ParameterStore] = None
        self._evaluator: Optional[MetricEvaluator] = None
        self.select_variant(variant_id or self.registry.ids()[0])

    # --- configuration -------------------------------------------------

    @property
    def config(self) -> RunConfig:
        return self.scheduler.config

    @config.setter
    def config(self, config: RunConfig) -> None:
        self.scheduler.config = config

    def configure(self, **overrides: Any) -> RunConfig:
        """Replace run options (e.g. dt, horizon); applies from the next tick."""
        self.scheduler.config = self.scheduler.config.replace(**overrides)
        return self.scheduler.config

    # --- state ---------------------------------------------------------

    @property
    def variant(self) -> ModelVariant:
        return self.session.variant

    @property
    def session(self) -> SimulationSession:
        return self.scheduler.session

    @property
    def parameters(self) -> ParameterStore:
        return self._parameters

    @property
    def status(self) -> Status:
        return self.session.status

    @property
    def metric(self) -> Optional[float]:
        return self.session.metric

    # --- host events ---------------------------------------------------

    def select_variant(self, variant_id: str) -> SimulationSession:
        """Switch model: pending ticks are dropped, parameters and history start over."""
        variant = self.registry.get(variant_id)
        parameters = ParameterStore(variant.parameters)
        self._parameters = parameters
        self._evaluator = MetricEvaluator(variant)
        session = self.scheduler.load(variant, parameters, self._evaluator)
        parameters.on_change = partial(self._parameters_changed, parameters)
        logger.info("Selected variant '%s'", variant.id)
        return session

    def _parameters_changed(self, parameters: ParameterStore) -> None:
        # A store left over from a previous variant no longer drives the metric
        if parameters is self._parameters:
            self._evaluator.refresh(self.session, parameters.snapshot())

    def set_parameter(self, key: str, value: Any) -> float:
        """
        Edit one parameter (clamped to its bounds) and refresh the metric at once.

        Edits made directly on ``parameters`` refresh the metric the same way.

        Returns:
            The stored value.
        """
        return self._parameters.set(key, value)

    def run(self) -> None:
        self.scheduler.run()

    def pause(self) -> None:
        self.scheduler.pause()

    def reset(self) -> SimulationSession:
        return self.scheduler.reset()

    def run_until_complete(self, max_ticks: int = 1_000_000) -> SimulationSession:
        """
        Run and pump a ManualTaskHost until the session stops.

        Only valid with a ManualTaskHost; live hosts pump themselves.
        """
        if not isinstance(self.host, ManualTaskHost):
            raise TypeError("run_until_complete() requires a ManualTaskHost")
        self.run()
        self.host.drain(max_ticks)
        return self.session

    def view(self) -> SandboxView:
        session = self.session
        return SandboxView(
            variant_id=session.variant.id,
            status=session.status.value,
            time=session.time,
            step=session.step,
            metric=session.metric,
            state=dict(session.state),
            parameters=self._parameters.snapshot(),
            history=session.history.samples(),
            series_labels=session.variant.series_labels,
            error=session.error,
        )
