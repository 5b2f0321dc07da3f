"""
Cooperative stepping loop: one integration step per tick while running.

The scheduler never blocks. Each tick re-registers the next one with a
TaskHost ("run this callback again soon") together with a CancellationToken;
pause, reset and variant switch cancel the token, and a tick that finds its
token cancelled or its session replaced does nothing.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import deque
from functools import partial
from typing import Callable, Deque, Optional, Tuple

import numpy as np

from dynalab.config import RunConfig
from dynalab.core.component import ModelVariant
from dynalab.core.metric import MetricEvaluator
from dynalab.core.parameters import ParameterStore
from dynalab.core.session import SimulationSession, Status
from dynalab.physics.integrators import get_integrator

logger = logging.getLogger(__name__)

# Relative slack on time >= horizon, absorbs rounding of time += dt
_HORIZON_TOL = 1e-9


class CancellationToken:
    """Flag shared by every tick of one run/resume chain."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class TaskHost(ABC):
    """Host-side repeating-task primitive."""

    @abstractmethod
    def schedule(self, callback: Callable[[], None], token: CancellationToken) -> None:
        """Run ``callback`` again soon, unless ``token`` is cancelled by then."""


class ManualTaskHost(TaskHost):
    """
    FIFO of pending callbacks pumped explicitly by the caller.
    Deterministic: used for tests and batch runs.
    """

    def __init__(self) -> None:
        self._queue: Deque[Tuple[Callable[[], None], CancellationToken]] = deque()

    def schedule(self, callback: Callable[[], None], token: CancellationToken) -> None:
        self._queue.append((callback, token))

    @property
    def pending(self) -> int:
        return sum(1 for _, token in self._queue if not token.cancelled)

    def run_pending(self, limit: Optional[int] = None) -> int:
        """
        Run the callbacks queued so far (not those they schedule in turn).

        Returns:
            Number of callbacks executed; cancelled entries are dropped uncounted.
        """
        batch = len(self._queue)
        executed = 0
        for _ in range(batch):
            if limit is not None and executed >= limit:
                break
            callback, token = self._queue.popleft()
            if token.cancelled:
                continue
            callback()
            executed += 1
        return executed

    def drain(self, max_ticks: int = 1_000_000) -> int:
        """Run callbacks until the queue is empty or ``max_ticks`` have run."""
        executed = 0
        while self._queue and executed < max_ticks:
            executed += self.run_pending(limit=max_ticks - executed)
        return executed


class AsyncioTaskHost(TaskHost):
    """Re-registers each tick on an asyncio loop every ``interval`` seconds."""

    def __init__(self, interval: float = 1.0 / 60.0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.interval = interval
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Loop given at construction, else the loop running right now."""
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, callback: Callable[[], None], token: CancellationToken) -> None:
        self.loop.call_later(self.interval, self._fire, callback, token)

    @staticmethod
    def _fire(callback: Callable[[], None], token: CancellationToken) -> None:
        if not token.cancelled:
            callback()


class Scheduler:
    """
    Owns the SimulationSession and drives it through
    Idle -> Running <-> Paused, Running -> Completed | Error.
    """

    def __init__(
        self,
        host: TaskHost,
        config: Optional[RunConfig] = None,
    ) -> None:
        """
        Args:
            host: repeating-task primitive used to register ticks.
            config: run options, re-read at every tick (replaceable between ticks).
        """
        self.host = host
        self.config = config or RunConfig()
        self._variant: Optional[ModelVariant] = None
        self._parameters: Optional[ParameterStore] = None
        self._evaluator: Optional[MetricEvaluator] = None
        self._session: Optional[SimulationSession] = None
        self._token = CancellationToken()

    @property
    def session(self) -> SimulationSession:
        if self._session is None:
            raise RuntimeError("Scheduler not loaded: call load(variant, ...) before use.")
        return self._session

    @property
    def status(self) -> Status:
        return self.session.status

    def load(
        self,
        variant: ModelVariant,
        parameters: ParameterStore,
        evaluator: MetricEvaluator,
    ) -> SimulationSession:
        """Stop pending ticks and start a fresh session for ``variant``."""
        self._variant = variant
        self._parameters = parameters
        self._evaluator = evaluator
        return self._new_session()

    def _new_session(self) -> SimulationSession:
        if self._variant is None:
            raise RuntimeError("Scheduler not loaded: call load(variant, ...) before use.")
        self._token.cancel()
        self._token = CancellationToken()
        session = SimulationSession.start(self._variant, self.config.history_capacity)
        self._evaluator.refresh(session, self._parameters.snapshot())
        self._session = session
        return session

    def run(self) -> None:
        session = self.session
        if session.status is Status.RUNNING:
            return
        if session.status is Status.ERROR:
            logger.warning(
                "Session %d is in error state (%s); reset before running",
                session.session_id,
                session.error,
            )
            return
        if self.config.degenerate:
            logger.info("dt=%s horizon=%s: nothing to integrate", self.config.dt, self.config.horizon)
            session.status = Status.COMPLETED
            return
        self._token.cancel()
        self._token = CancellationToken()
        session.status = Status.RUNNING
        logger.info("Running %s from t=%.4g (step %d)", session.variant.id, session.time, session.step)
        self._schedule(session)

    def pause(self) -> None:
        session = self.session
        if session.status is not Status.RUNNING:
            return
        self._token.cancel()
        session.status = Status.PAUSED
        logger.info("Paused %s at t=%.4g (step %d)", session.variant.id, session.time, session.step)

    def reset(self) -> SimulationSession:
        """Replace the session with a fresh Idle one, whatever the current status."""
        session = self._new_session()
        logger.info("Reset %s", session.variant.id)
        return session

    def _schedule(self, session: SimulationSession) -> None:
        self.host.schedule(partial(self._tick, self._token, session), self._token)

    def _tick(self, token: CancellationToken, session: SimulationSession) -> None:
        # Stale tick: paused, reset or variant switched since it was scheduled
        if token.cancelled or session is not self._session or session.status is not Status.RUNNING:
            return
        try:
            running = self._advance(session)
        except Exception as exc:
            self._fail(session, str(exc))
            raise
        if running:
            self._schedule(session)

    def _advance(self, session: SimulationSession) -> bool:
        """
        Integrate one step.

        Returns:
            True if the session is still running afterwards.
        """
        config = self.config
        dt, horizon = config.dt, config.horizon
        if config.degenerate or session.time >= horizon - _HORIZON_TOL * dt:
            session.status = Status.COMPLETED
            logger.info("Completed %s at t=%.4g after %d steps", session.variant.id, session.time, session.step)
            return False

        params = self._parameters.snapshot()
        step_fn = get_integrator(config.method)
        with np.errstate(over="ignore", invalid="ignore"):
            state = step_fn(session.state, params, session.time, dt, session.variant.derivatives)
        if not all(np.isfinite(v) for v in state.values()):
            return self._fail(session, f"non-finite state at t={session.time + dt:.6g}: {state}")
        metric = self._evaluator.evaluate(state, params)
        if not np.isfinite(metric):
            return self._fail(session, f"non-finite metric at t={session.time + dt:.6g}")
        primary, secondary = session.variant.series(state)

        session.state = state
        session.time += dt
        session.step += 1
        session.history.append(session.time, primary, secondary)
        session.metric = metric
        return True

    def _fail(self, session: SimulationSession, message: str) -> bool:
        session.status = Status.ERROR
        session.error = message
        self._token.cancel()
        logger.warning("Session %d stopped: %s", session.session_id, message)
        return False
