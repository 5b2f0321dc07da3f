"""
Simulation display helpers.

_utils draws a HistoryBuffer (time series, phase portrait) with matplotlib;
the engine itself has no drawing logic.
"""

from dynalab.simulation._utils import plot_history, plot_phase_portrait

__all__ = [
    "plot_history",
    "plot_phase_portrait",
]
