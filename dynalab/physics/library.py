"""
Modelli dinamici pronti all'uso.

Each class is a ModelVariant with its parameter schema, initial state and the
three laws already written; the sandbox only tunes their parameters.
"""

import math
from types import MappingProxyType
from typing import Mapping, Tuple

from dynalab.core.component import ModelVariant, State
from dynalab.core.signals import ParameterSpec


class DampedDrivenOscillator(ModelVariant):
    """
    Oscillatore meccanico forzato: m*ddx + c*dx + k*x = F*cos(omega*t).
    State {x, v}; metric is the mechanical energy 0.5*m*v^2 + 0.5*k*x^2.
    """

    id = "oscillator"
    label = "Damped driven oscillator"
    description = "Mass on a spring with viscous damping and a periodic driving force."
    parameters = (
        ParameterSpec("mass", "Mass", 1.2, 0.1, 10.0, 0.1, "kg"),
        ParameterSpec("k", "Spring constant", 12.0, 0.0, 50.0, 0.5, "N/m"),
        ParameterSpec("c", "Damping", 0.6, 0.0, 5.0, 0.05, "N s/m"),
        ParameterSpec("F", "Drive amplitude", 1.8, 0.0, 10.0, 0.1, "N"),
        ParameterSpec("omega", "Drive frequency", 2.5, 0.0, 10.0, 0.1, "rad/s"),
    )
    initial = MappingProxyType({"x": 1.0, "v": 0.0})
    series_labels = ("position", "velocity")

    def derivatives(self, state: Mapping[str, float], params: Mapping[str, float], t: float) -> State:
        x, v = state["x"], state["v"]
        force = params["F"] * math.cos(params["omega"] * t)
        acc = (force - params["k"] * x - params["c"] * v) / params["mass"]
        return {"x": v, "v": acc}

    def metric(self, state: Mapping[str, float], params: Mapping[str, float]) -> float:
        x, v = state["x"], state["v"]
        return 0.5 * params["mass"] * v * v + 0.5 * params["k"] * x * x

    def series(self, state: Mapping[str, float]) -> Tuple[float, float]:
        return state["x"], state["v"]


class PredatorPrey(ModelVariant):
    """
    Lotka-Volterra: dprey = alpha*prey - beta*prey*predator,
    dpredator = delta*prey*predator - gamma*predator.
    """

    id = "predator_prey"
    label = "Predator-prey"
    description = "Lotka-Volterra populations cycling around their coexistence point."
    parameters = (
        ParameterSpec("alpha", "Prey growth", 1.1, 0.0, 3.0, 0.05),
        ParameterSpec("beta", "Predation rate", 0.4, 0.0, 2.0, 0.05),
        ParameterSpec("delta", "Predator efficiency", 0.3, 0.0, 2.0, 0.05),
        ParameterSpec("gamma", "Predator death", 0.9, 0.0, 3.0, 0.05),
    )
    initial = MappingProxyType({"prey": 1.4, "predator": 0.8})
    series_labels = ("prey", "predator")

    def derivatives(self, state: Mapping[str, float], params: Mapping[str, float], t: float) -> State:
        prey, predator = state["prey"], state["predator"]
        return {
            "prey": params["alpha"] * prey - params["beta"] * prey * predator,
            "predator": params["delta"] * prey * predator - params["gamma"] * predator,
        }

    def metric(self, state: Mapping[str, float], params: Mapping[str, float]) -> float:
        # Total population
        return state["prey"] + state["predator"]

    def series(self, state: Mapping[str, float]) -> Tuple[float, float]:
        return state["prey"], state["predator"]


class ThermalNetwork(ModelVariant):
    """
    Two thermal masses: node 1 is heated with ``power`` and exchanges heat
    with node 2 through ``k12``; both lose heat to ambient through ``h``.

    C1*dT1/dt = power - k12*(T1 - T2) - h*(T1 - ambient)
    C2*dT2/dt = k12*(T1 - T2) - h*(T2 - ambient)
    """

    id = "thermal"
    label = "Two-node thermal network"
    description = "Heated mass coupled to a second mass, both cooling to ambient."
    parameters = (
        ParameterSpec("power", "Heater power", 50.0, 0.0, 200.0, 5.0, "W"),
        ParameterSpec("C1", "Capacity node 1", 100.0, 1.0, 1000.0, 10.0, "J/K"),
        ParameterSpec("C2", "Capacity node 2", 150.0, 1.0, 1000.0, 10.0, "J/K"),
        ParameterSpec("k12", "Coupling conductance", 2.0, 0.0, 20.0, 0.1, "W/K"),
        ParameterSpec("h", "Loss to ambient", 0.5, 0.0, 10.0, 0.1, "W/K"),
        ParameterSpec("ambient", "Ambient temperature", 20.0, -20.0, 60.0, 1.0, "degC"),
    )
    initial = MappingProxyType({"T1": 20.0, "T2": 20.0})
    series_labels = ("T1", "T2")

    def derivatives(self, state: Mapping[str, float], params: Mapping[str, float], t: float) -> State:
        t1, t2 = state["T1"], state["T2"]
        flow = params["k12"] * (t1 - t2)
        amb = params["ambient"]
        return {
            "T1": (params["power"] - flow - params["h"] * (t1 - amb)) / params["C1"],
            "T2": (flow - params["h"] * (t2 - amb)) / params["C2"],
        }

    def metric(self, state: Mapping[str, float], params: Mapping[str, float]) -> float:
        # Heat flow from node 1 to node 2 (W)
        return params["k12"] * (state["T1"] - state["T2"])

    def series(self, state: Mapping[str, float]) -> Tuple[float, float]:
        return state["T1"], state["T2"]
