"""Shared fixtures: sandboxes on a manual host and small test variants."""

from types import MappingProxyType
from typing import Callable, List, Tuple

import pytest

from dynalab import ParameterSpec, RunConfig, Sandbox
from dynalab.core import CancellationToken, ModelVariant, TaskHost
from dynalab.physics import VariantRegistry, default_registry


class RecordingHost(TaskHost):
    """Keeps every scheduled callback, even cancelled ones, for replay."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Callable[[], None], CancellationToken]] = []

    def schedule(self, callback: Callable[[], None], token: CancellationToken) -> None:
        self.calls.append((callback, token))


class NanAfter(ModelVariant):
    """dx/dt = 1 until t >= 0.25, then NaN."""

    id = "nan_after"
    label = "NaN after t=0.25"
    parameters = (ParameterSpec("rate", "Rate", 1.0, 0.0, 10.0),)
    initial = MappingProxyType({"x": 1.0})

    def derivatives(self, state, params, t):
        return {"x": float("nan") if t >= 0.25 else params["rate"]}

    def metric(self, state, params):
        return state["x"]

    def series(self, state):
        return state["x"], 0.0


class ExtraField(ModelVariant):
    """Broken model: returns a field the state does not have."""

    id = "extra_field"
    label = "Broken"
    initial = MappingProxyType({"x": 0.0})

    def derivatives(self, state, params, t):
        return {"x": 1.0, "y": 0.0}

    def metric(self, state, params):
        return 0.0

    def series(self, state):
        return state["x"], 0.0


@pytest.fixture
def recording_host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def sandbox() -> Sandbox:
    return Sandbox(config=RunConfig(dt=0.05, horizon=5.0))


@pytest.fixture
def test_registry() -> VariantRegistry:
    registry = default_registry()
    registry.register(NanAfter())
    registry.register(ExtraField())
    return registry


@pytest.fixture
def zero_derivatives() -> Callable:
    def f(state, params, t):
        return {k: 0.0 for k in state}

    return f
