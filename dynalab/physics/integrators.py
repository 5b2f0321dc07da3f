"""
Fixed-step explicit integrators for named-field states:
next_state = step(state, params, t, dt, derivatives).

Pure numerical level: no dependency on sessions or scheduling. The state's
fields are packed into a numpy vector in the state's key order, integrated,
and unpacked into a new dict. Every derivative evaluation must return exactly
the state's keys; otherwise ModelContractError is raised.
"""

from typing import Callable, Dict, Mapping, Sequence, Tuple

import numpy as np

from dynalab.core.errors import ModelContractError

# Type for the derivative law: (state, params, t) -> d(state)/dt
Derivatives = Callable[[Mapping[str, float], Mapping[str, float], float], Mapping[str, float]]
StepFn = Callable[
    [Mapping[str, float], Mapping[str, float], float, float, Derivatives], Dict[str, float]
]


def check_fields(keys: Sequence[str], delta: Mapping[str, float], stage: str = "") -> None:
    """Raise ModelContractError if ``delta`` does not carry exactly ``keys``."""
    expected = set(keys)
    got = set(delta)
    if expected != got:
        raise ModelContractError(missing=expected - got, extra=got - expected, stage=stage)


def _pack(state: Mapping[str, float]) -> Tuple[Tuple[str, ...], np.ndarray]:
    keys = tuple(state)
    return keys, np.array([state[k] for k in keys], dtype=float)


def _unpack(keys: Tuple[str, ...], x: np.ndarray) -> Dict[str, float]:
    return dict(zip(keys, x.tolist()))


def _rate(
    f: Derivatives,
    keys: Tuple[str, ...],
    x: np.ndarray,
    params: Mapping[str, float],
    t: float,
    stage: str,
) -> np.ndarray:
    delta = f(_unpack(keys, x), params, t)
    check_fields(keys, delta, stage)
    return np.array([delta[k] for k in keys], dtype=float)


def euler_step(
    state: Mapping[str, float], params: Mapping[str, float], t: float, dt: float, f: Derivatives
) -> Dict[str, float]:
    """Explicit Euler, order 1: x_{n+1} = x_n + dt * f(x_n, p, t_n)."""
    keys, x = _pack(state)
    k1 = _rate(f, keys, x, params, t, "k1")
    return _unpack(keys, x + dt * k1)


def midpoint_step(
    state: Mapping[str, float], params: Mapping[str, float], t: float, dt: float, f: Derivatives
) -> Dict[str, float]:
    """Midpoint (RK2): evaluation at interval center."""
    keys, x = _pack(state)
    k1 = _rate(f, keys, x, params, t, "k1")
    k2 = _rate(f, keys, x + 0.5 * dt * k1, params, t + 0.5 * dt, "k2")
    return _unpack(keys, x + dt * k2)


def heun_step(
    state: Mapping[str, float], params: Mapping[str, float], t: float, dt: float, f: Derivatives
) -> Dict[str, float]:
    """Heun (improved Euler), order 2: Euler predictor + trapezoidal corrector."""
    keys, x = _pack(state)
    k1 = _rate(f, keys, x, params, t, "k1")
    k2 = _rate(f, keys, x + dt * k1, params, t + dt, "k2")
    return _unpack(keys, x + 0.5 * dt * (k1 + k2))


def rk4_step(
    state: Mapping[str, float], params: Mapping[str, float], t: float, dt: float, f: Derivatives
) -> Dict[str, float]:
    """Runge-Kutta 4, order 4."""
    keys, x = _pack(state)
    k1 = _rate(f, keys, x, params, t, "k1")
    k2 = _rate(f, keys, x + 0.5 * dt * k1, params, t + 0.5 * dt, "k2")
    k3 = _rate(f, keys, x + 0.5 * dt * k2, params, t + 0.5 * dt, "k3")
    k4 = _rate(f, keys, x + dt * k3, params, t + dt, "k4")
    return _unpack(keys, x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4))


class EulerIntegrator:
    """Explicit Euler integrator, order 1."""

    @staticmethod
    def step(state, params, t: float, dt: float, f: Derivatives) -> Dict[str, float]:
        return euler_step(state, params, t, dt, f)


class MidpointIntegrator:
    """Midpoint integrator (RK2)."""

    @staticmethod
    def step(state, params, t: float, dt: float, f: Derivatives) -> Dict[str, float]:
        return midpoint_step(state, params, t, dt, f)


class HeunIntegrator:
    """Heun integrator, order 2."""

    @staticmethod
    def step(state, params, t: float, dt: float, f: Derivatives) -> Dict[str, float]:
        return heun_step(state, params, t, dt, f)


class RK4Integrator:
    """Runge-Kutta 4 integrator, order 4."""

    @staticmethod
    def step(state, params, t: float, dt: float, f: Derivatives) -> Dict[str, float]:
        return rk4_step(state, params, t, dt, f)


INTEGRATORS: Dict[str, StepFn] = {
    "euler": euler_step,
    "midpoint": midpoint_step,
    "heun": heun_step,
    "rk4": rk4_step,
}


def get_integrator(name: str) -> StepFn:
    """Step function by name ('euler', 'midpoint', 'heun', 'rk4')."""
    try:
        return INTEGRATORS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown integrator '{name}'. Available: {sorted(INTEGRATORS)}"
        ) from None
