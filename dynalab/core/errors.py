"""Exceptions raised by the simulation engine."""

from typing import Iterable


class ModelContractError(ValueError):
    """A derivative law returned a delta whose fields differ from the state."""

    def __init__(self, missing: Iterable[str], extra: Iterable[str], stage: str = "") -> None:
        self.missing = tuple(sorted(missing))
        self.extra = tuple(sorted(extra))
        parts = []
        if self.missing:
            parts.append(f"missing fields {list(self.missing)}")
        if self.extra:
            parts.append(f"extra fields {list(self.extra)}")
        where = f" at stage {stage}" if stage else ""
        super().__init__(f"Derivative delta does not match state{where}: " + ", ".join(parts))


class UnknownParameterError(KeyError):
    """Parameter key not declared by the active variant."""


class UnknownVariantError(KeyError):
    """Variant id not present in the registry."""
