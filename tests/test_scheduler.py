"""Scheduler: run/pause/reset lifecycle, tick ordering, stale ticks, errors."""

import pytest

from dynalab import RunConfig, Sandbox
from dynalab.core import (
    CancellationToken,
    ManualTaskHost,
    MetricEvaluator,
    ModelContractError,
    ParameterStore,
    Scheduler,
    Status,
)
from dynalab.physics import DampedDrivenOscillator, PredatorPrey


def _loaded_scheduler(host=None, **config) -> Scheduler:
    variant = DampedDrivenOscillator()
    scheduler = Scheduler(host or ManualTaskHost(), RunConfig(**config))
    scheduler.load(variant, ParameterStore(variant.parameters), MetricEvaluator(variant))
    return scheduler


def test_oscillator_scenario_runs_100_steps(sandbox: Sandbox) -> None:
    for key, value in {"mass": 1.2, "k": 12.0, "c": 0.6, "F": 1.8}.items():
        sandbox.set_parameter(key, value)
    session = sandbox.run_until_complete()
    assert session.status is Status.COMPLETED
    assert session.step == 100
    assert session.time == pytest.approx(5.0)
    assert len(session.history) == 100
    assert session.history.latest.time == pytest.approx(5.0)
    assert sandbox.host.pending == 0


def test_scheduler_requires_load() -> None:
    scheduler = Scheduler(ManualTaskHost())
    with pytest.raises(RuntimeError):
        scheduler.run()
    with pytest.raises(RuntimeError):
        scheduler.reset()


def test_one_step_per_tick() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    host = scheduler.host
    scheduler.run()
    assert host.run_pending() == 1
    assert scheduler.session.step == 1
    assert scheduler.session.time == pytest.approx(0.1)
    assert host.run_pending() == 1
    assert scheduler.session.step == 2
    assert len(scheduler.session.history) == 2


def test_run_is_idempotent() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    scheduler.run()
    scheduler.run()
    scheduler.run()
    assert scheduler.host.pending == 1
    scheduler.host.run_pending()
    assert scheduler.session.step == 1


def test_pause_and_resume_continue_where_they_left_off() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    host = scheduler.host
    scheduler.run()
    host.run_pending()
    host.run_pending()
    scheduler.pause()
    assert scheduler.status is Status.PAUSED
    assert host.pending == 0
    assert host.drain() == 0
    state, history = dict(scheduler.session.state), scheduler.session.history.samples()

    scheduler.run()
    assert scheduler.session.step == 2
    assert scheduler.session.state == state
    assert scheduler.session.history.samples() == history
    host.drain()
    assert scheduler.status is Status.COMPLETED
    assert scheduler.session.step == 10


def test_pause_when_not_running_is_a_no_op() -> None:
    scheduler = _loaded_scheduler()
    scheduler.pause()
    assert scheduler.status is Status.IDLE


@pytest.mark.parametrize("steps, then", [(0, None), (3, None), (3, "pause"), (20, None)])
def test_reset_from_any_status(steps: int, then) -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    variant = scheduler.session.variant
    scheduler.run()
    scheduler.host.drain(max_ticks=steps)
    if then == "pause":
        scheduler.pause()
    before = scheduler.session
    session = scheduler.reset()
    assert session is not before
    assert session.status is Status.IDLE
    assert session.time == 0.0
    assert session.step == 0
    assert session.state == variant.initial_state
    assert len(session.history) == 0
    assert session.error is None
    assert scheduler.host.pending == 0


def test_reset_while_running_drops_pending_ticks() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    scheduler.run()
    scheduler.host.run_pending()
    scheduler.reset()
    assert scheduler.host.drain() == 0
    assert scheduler.session.step == 0


def test_stale_tick_never_touches_a_replaced_session(recording_host) -> None:
    host = recording_host
    scheduler = _loaded_scheduler(host=host, dt=0.1, horizon=1.0)
    scheduler.run()
    stale, _ = host.calls[-1]
    scheduler.reset()
    scheduler.run()
    # Fire the old callback regardless of its cancelled token
    stale()
    assert scheduler.session.step == 0
    fresh, token = host.calls[-1]
    assert not token.cancelled
    fresh()
    assert scheduler.session.step == 1


def test_stale_tick_after_pause_and_resume(recording_host) -> None:
    host = recording_host
    scheduler = _loaded_scheduler(host=host, dt=0.1, horizon=1.0)
    scheduler.run()
    stale, stale_token = host.calls[-1]
    scheduler.pause()
    scheduler.run()
    assert stale_token.cancelled
    stale()
    assert scheduler.session.step == 0
    assert len(host.calls) == 2


@pytest.mark.parametrize("dt, horizon", [(0.0, 5.0), (-0.1, 5.0), (0.1, 0.0), (0.1, -1.0)])
def test_degenerate_config_completes_without_steps(dt: float, horizon: float) -> None:
    scheduler = _loaded_scheduler(dt=dt, horizon=horizon)
    scheduler.run()
    assert scheduler.status is Status.COMPLETED
    assert scheduler.host.pending == 0
    assert scheduler.session.step == 0
    assert len(scheduler.session.history) == 0


def test_degenerate_config_set_between_ticks() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    scheduler.run()
    scheduler.host.run_pending()
    scheduler.config = scheduler.config.replace(dt=0.0)
    scheduler.host.drain()
    assert scheduler.status is Status.COMPLETED
    assert scheduler.session.step == 1
    assert len(scheduler.session.history) == 1


def test_config_changes_apply_on_next_tick() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=1.0)
    scheduler.run()
    scheduler.host.run_pending()
    scheduler.config = scheduler.config.replace(dt=0.25)
    scheduler.host.run_pending()
    assert scheduler.session.time == pytest.approx(0.35)


def test_completed_run_resumes_when_horizon_grows() -> None:
    scheduler = _loaded_scheduler(dt=0.1, horizon=0.5)
    scheduler.run()
    scheduler.host.drain()
    assert scheduler.status is Status.COMPLETED
    assert scheduler.session.step == 5
    scheduler.config = scheduler.config.replace(horizon=1.0)
    scheduler.run()
    scheduler.host.drain()
    assert scheduler.session.step == 10


def test_parameter_edits_seen_at_next_tick() -> None:
    variant = PredatorPrey()
    params = ParameterStore(variant.parameters)
    scheduler = Scheduler(ManualTaskHost(), RunConfig(dt=0.05, horizon=1.0))
    scheduler.load(variant, params, MetricEvaluator(variant))
    scheduler.run()
    scheduler.host.run_pending()
    params.set("alpha", 0.0)
    params.set("beta", 0.0)
    prey = scheduler.session.state["prey"]
    scheduler.host.run_pending()
    # With alpha = beta = 0 the prey population is frozen
    assert scheduler.session.state["prey"] == prey


def test_numeric_degeneration_flags_error(test_registry) -> None:
    sandbox = Sandbox(test_registry, config=RunConfig(dt=0.1, horizon=5.0), variant_id="nan_after")
    session = sandbox.run_until_complete()
    assert session.status is Status.ERROR
    assert sandbox.view().status == "error"
    assert "non-finite" in session.error
    assert session.step == 2
    assert session.state["x"] == pytest.approx(1.2)
    assert session.metric == pytest.approx(1.2)
    assert [s.primary for s in session.history] == pytest.approx([1.1, 1.2])
    assert sandbox.host.pending == 0


def test_run_refused_after_error_until_reset(test_registry) -> None:
    sandbox = Sandbox(test_registry, config=RunConfig(dt=0.1, horizon=5.0), variant_id="nan_after")
    sandbox.run_until_complete()
    sandbox.run()
    assert sandbox.status is Status.ERROR
    assert sandbox.host.pending == 0
    sandbox.reset()
    assert sandbox.status is Status.IDLE
    sandbox.run()
    assert sandbox.status is Status.RUNNING


def test_contract_violation_propagates_from_tick(test_registry) -> None:
    sandbox = Sandbox(test_registry, config=RunConfig(dt=0.1, horizon=5.0), variant_id="extra_field")
    sandbox.run()
    with pytest.raises(ModelContractError, match="y"):
        sandbox.host.run_pending()
    assert sandbox.status is Status.ERROR
    assert sandbox.session.step == 0
    assert sandbox.host.pending == 0


def test_cancellation_token() -> None:
    token = CancellationToken()
    assert not token.cancelled
    token.cancel()
    token.cancel()
    assert token.cancelled


def test_manual_host_limit() -> None:
    host = ManualTaskHost()
    seen = []
    for i in range(5):
        host.schedule(lambda i=i: seen.append(i), CancellationToken())
    cancelled = CancellationToken()
    cancelled.cancel()
    host.schedule(lambda: seen.append("x"), cancelled)
    assert host.pending == 5
    assert host.run_pending(limit=2) == 2
    assert seen == [0, 1]
    assert host.drain() == 3
    assert seen == [0, 1, 2, 3, 4]
