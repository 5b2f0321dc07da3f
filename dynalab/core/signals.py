"""Declared tunable parameters: key, bounds, UI step, unit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterSpec:
    """One tunable parameter: key, default value, bounds and UI step."""

    key: str
    label: str
    value: float
    min: float
    max: float
    step: float = 0.1
    unit: str = ""

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Parameter '{self.key}': min {self.min} > max {self.max}")
        if not self.min <= self.value <= self.max:
            raise ValueError(
                f"Parameter '{self.key}': default {self.value} outside [{self.min}, {self.max}]"
            )

    def clamp(self, value: float) -> float:
        """Bring value into [min, max]."""
        return min(max(float(value), self.min), self.max)
