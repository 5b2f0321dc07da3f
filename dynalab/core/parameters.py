"""Live-editable parameter values for the active variant."""

import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

import numpy as np

from dynalab.core.errors import UnknownParameterError
from dynalab.core.signals import ParameterSpec

logger = logging.getLogger(__name__)


class ParameterStore:
    """
    Current values of a variant's declared parameters.

    Every stored value lies inside its declared [min, max]; edits are clamped,
    never rejected, so a live edit cannot leave the model in an invalid state.
    Unknown keys raise UnknownParameterError.
    """

    def __init__(
        self,
        specs: Tuple[ParameterSpec, ...],
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Args:
            specs: declared parameters of the variant.
            on_change: called after every edit that stores a value
                (set, update, reset_defaults).
        """
        self._specs: Dict[str, ParameterSpec] = {s.key: s for s in specs}
        self._values: Dict[str, float] = {s.key: float(s.value) for s in specs}
        self.on_change = on_change

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def spec(self, key: str) -> ParameterSpec:
        try:
            return self._specs[key]
        except KeyError:
            raise UnknownParameterError(key) from None

    def specs(self) -> Tuple[ParameterSpec, ...]:
        return tuple(self._specs.values())

    def get(self, key: str) -> float:
        self.spec(key)
        return self._values[key]

    def set(self, key: str, value: Any) -> float:
        """
        Store ``value`` for ``key`` clamped into the declared bounds.

        Non-numeric or NaN values leave the current value untouched.
        Integers too large for a float clamp to the bound on their side.

        Returns:
            The value actually stored.
        """
        spec = self.spec(key)
        try:
            number = float(value)
        except OverflowError:
            if not isinstance(value, int):
                logger.warning("Ignoring unrepresentable value for parameter '%s'", key)
                return self._values[key]
            number = spec.max if value > 0 else spec.min
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric value %r for parameter '%s'", value, key)
            return self._values[key]
        if np.isnan(number):
            logger.warning("Ignoring NaN for parameter '%s'", key)
            return self._values[key]
        clamped = spec.clamp(number)
        if clamped != number:
            logger.debug("Clamped '%s' from %s to %s", key, number, clamped)
        self._values[key] = clamped
        self._changed()
        return clamped

    def update(self, values: Mapping[str, Any]) -> Dict[str, float]:
        """Set several parameters; returns the stored values."""
        return {k: self.set(k, v) for k, v in values.items()}

    def reset_defaults(self) -> None:
        for key, spec in self._specs.items():
            self._values[key] = float(spec.value)
        self._changed()

    def snapshot(self) -> Dict[str, float]:
        """Copy of the current mapping, read once per step."""
        return dict(self._values)

    def __getitem__(self, key: str) -> float:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterStore({self._values!r})"
