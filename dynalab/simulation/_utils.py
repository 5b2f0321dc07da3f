"""
Visualization utilities: time series and phase portrait of a HistoryBuffer.

Matplotlib is optional; if not installed, functions raise ImportError.
"""

from typing import Any, Optional, Tuple

from dynalab.core.history import HistoryBuffer


def _labels(labels: Optional[Tuple[str, str]]) -> Tuple[str, str]:
    return tuple(labels) if labels else ("primary", "secondary")


def plot_history(
    history: HistoryBuffer,
    labels: Optional[Tuple[str, str]] = None,
    ax: Optional[Any] = None,
    title: str = "Series vs time",
    **kwargs: Any,
) -> Any:
    """
    Plot both series of the history against time on one axes.

    Args:
        history: HistoryBuffer to draw.
        labels: names of the primary/secondary series (e.g. variant.series_labels).
        ax: matplotlib axes (if None, creates new figure).
        title: axes title.
        **kwargs: passed to ax.plot().

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_history.")
    primary_label, secondary_label = _labels(labels)
    data = history.to_dict()
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(8, 4))
    ax.plot(data["time"], data["primary"], label=primary_label, **kwargs)
    ax.plot(data["time"], data["secondary"], label=secondary_label, **kwargs)
    ax.set_xlabel("time")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize=8)
    ax.grid(True, alpha=0.3)
    return ax


def plot_phase_portrait(
    history: HistoryBuffer,
    labels: Optional[Tuple[str, str]] = None,
    ax: Optional[Any] = None,
    title: str = "Phase portrait",
    **kwargs: Any,
) -> Any:
    """
    Plot the primary series against the secondary one.

    Returns:
        matplotlib axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plot_phase_portrait.")
    xlabel, ylabel = _labels(labels)
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    ax.plot(history.get("primary"), history.get("secondary"), **kwargs)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax
