"""Verify that main modules are importable."""

import pytest


def test_import_dynalab() -> None:
    import dynalab
    assert dynalab.__version__ == "0.1.0"


def test_import_core() -> None:
    from dynalab.core import Sandbox, Scheduler, ParameterStore, HistoryBuffer, MetricEvaluator
    assert Sandbox is not None
    assert Scheduler is not None
    assert ParameterStore is not None
    assert HistoryBuffer is not None
    assert MetricEvaluator is not None


def test_import_physics() -> None:
    from dynalab.physics import rk4_step, RK4Integrator, default_registry, DampedDrivenOscillator
    assert rk4_step is not None
    assert RK4Integrator is not None
    assert DampedDrivenOscillator is not None
    assert len(default_registry()) == 3


def test_import_io() -> None:
    from dynalab.io import save_config, load_config, load_run_config
    assert save_config is not None
    assert load_config is not None
    assert load_run_config is not None


def test_status_strings() -> None:
    from dynalab.core import Status
    assert [s.value for s in Status] == ["ready", "running", "paused", "completed", "error"]
