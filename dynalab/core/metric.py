"""Scalar metric shown alongside the plot (energy, population, heat flow)."""

from typing import Mapping

import numpy as np

from dynalab.core.component import ModelVariant
from dynalab.core.session import SimulationSession


class MetricEvaluator:
    """
    Evaluates the variant's metric law on the current state and parameters.

    Called after every tick and after every parameter edit, so the displayed
    value always reflects the latest parameters.
    """

    def __init__(self, variant: ModelVariant) -> None:
        self.variant = variant

    def evaluate(self, state: Mapping[str, float], params: Mapping[str, float]) -> float:
        return float(self.variant.metric(state, params))

    def refresh(self, session: SimulationSession, params: Mapping[str, float]) -> bool:
        """
        Store the metric on the session.

        Returns:
            False (session untouched) if the value is not finite.
        """
        value = self.evaluate(session.state, params)
        if not np.isfinite(value):
            return False
        session.metric = value
        return True
