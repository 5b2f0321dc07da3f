"""Bounded in-memory history of plotted samples, with numpy and CSV export."""

from collections import deque
from pathlib import Path
from typing import Deque, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from dynalab.config import DEFAULT_CAPACITY


class HistorySample(NamedTuple):
    """One plotted point: simulated time and the two projected series."""

    time: float
    primary: float
    secondary: float


class HistoryBuffer:
    """
    Sliding window of the most recent samples.
    Once full, each push evicts the oldest sample (O(1)).
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """
        Args:
            capacity: maximum number of samples kept.
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = int(capacity)
        self._samples: Deque[HistorySample] = deque(maxlen=self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, sample: HistorySample) -> None:
        """Add a sample; the oldest one is dropped once the buffer is full."""
        self._samples.append(sample)

    def append(self, time: float, primary: float, secondary: float) -> None:
        self.push(HistorySample(float(time), float(primary), float(secondary)))

    def clear(self) -> None:
        """Drop every sample."""
        self._samples.clear()

    @property
    def latest(self) -> Optional[HistorySample]:
        return self._samples[-1] if self._samples else None

    def samples(self) -> Tuple[HistorySample, ...]:
        """Immutable copy of the window, oldest first."""
        return tuple(self._samples)

    def get(self, field: str) -> np.ndarray:
        """Series for one field ('time', 'primary', 'secondary') as a numpy array."""
        if field not in HistorySample._fields:
            raise KeyError(field)
        return np.array([getattr(s, field) for s in self._samples], dtype=float)

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {f: self.get(f) for f in HistorySample._fields}

    def to_csv(
        self,
        path: Union[str, Path],
        labels: Optional[Tuple[str, str]] = None,
        delimiter: str = ",",
    ) -> None:
        """
        Export the window to CSV, one row per sample.

        Args:
            labels: column names for the two series (default primary, secondary).
        """
        path = Path(path)
        names = ("time",) + tuple(labels or HistorySample._fields[1:])
        rows: List[str] = [delimiter.join(names)]
        for s in self._samples:
            rows.append(delimiter.join(repr(v) for v in s))
        path.write_text("\n".join(rows) + "\n", encoding="utf-8")

    def __iter__(self) -> Iterator[HistorySample]:
        return iter(tuple(self._samples))

    def __len__(self) -> int:
        return len(self._samples)
