"""Registry of the variants a sandbox can select."""

from typing import Dict, Iterator, Tuple

from dynalab.core.component import ModelVariant
from dynalab.core.errors import UnknownVariantError
from dynalab.physics.library import DampedDrivenOscillator, PredatorPrey, ThermalNetwork


class VariantRegistry:
    """Variants by unique id, kept in registration order."""

    def __init__(self) -> None:
        self._variants: Dict[str, ModelVariant] = {}

    def register(self, variant: ModelVariant) -> ModelVariant:
        if variant.id in self._variants:
            raise ValueError(f"Variant id '{variant.id}' already registered")
        self._variants[variant.id] = variant
        return variant

    def get(self, variant_id: str) -> ModelVariant:
        try:
            return self._variants[variant_id]
        except KeyError:
            raise UnknownVariantError(
                f"Unknown variant '{variant_id}'. Available: {list(self._variants)}"
            ) from None

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._variants)

    def __contains__(self, variant_id: object) -> bool:
        return variant_id in self._variants

    def __iter__(self) -> Iterator[ModelVariant]:
        return iter(tuple(self._variants.values()))

    def __len__(self) -> int:
        return len(self._variants)


def default_registry() -> VariantRegistry:
    """Fresh registry with the built-in oscillator, predator-prey and thermal models."""
    registry = VariantRegistry()
    registry.register(DampedDrivenOscillator())
    registry.register(PredatorPrey())
    registry.register(ThermalNetwork())
    return registry
