"""Interfaccia base per i modelli dinamici del sandbox."""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from dynalab.core.signals import ParameterSpec

# Named scalar fields of one model at one instant
State = Dict[str, float]
Params = Mapping[str, float]


class ModelVariant(ABC):
    """
    Base class for every dynamical model the sandbox can run.

    A variant is pure data (id, labels, parameter schema, initial state) plus
    three pure functions: derivatives, metric and series. It holds no session
    state, so one instance can back any number of sessions.

    Subclasses set the class attributes and implement the three laws.
    """

    id: str = ""
    label: str = ""
    description: str = ""
    parameters: Tuple[ParameterSpec, ...] = ()
    initial: Mapping[str, float] = MappingProxyType({})
    series_labels: Tuple[str, str] = ("primary", "secondary")

    def __init__(self) -> None:
        if not self.id:
            raise ValueError(f"{type(self).__name__} must declare a non-empty id")
        keys = [p.key for p in self.parameters]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Variant '{self.id}' declares duplicate parameter keys: {keys}")
        if not self.initial:
            raise ValueError(f"Variant '{self.id}' declares no state fields")

    @property
    def initial_state(self) -> State:
        """Fresh copy of the initial state."""
        return {k: float(v) for k, v in self.initial.items()}

    @property
    def fields(self) -> Tuple[str, ...]:
        """State field names, in declaration order."""
        return tuple(self.initial)

    def default_params(self) -> Dict[str, float]:
        return {p.key: p.value for p in self.parameters}

    @abstractmethod
    def derivatives(self, state: Params, params: Params, t: float) -> State:
        """
        Right-hand side of the ODE: d(state)/dt.

        Must return exactly the keys of ``state``.
        """

    @abstractmethod
    def metric(self, state: Params, params: Params) -> float:
        """Scalar summary shown next to the plot."""

    @abstractmethod
    def series(self, state: Params) -> Tuple[float, float]:
        """Projection of the state onto the two plotted series."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
