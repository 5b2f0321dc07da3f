"""
Batch run of the damped driven oscillator on a manual host:
mass=1.2, k=12, c=0.6, F=1.8, dt=0.05, horizon=5 -> 100 steps.
Writes the history window to CSV and, if matplotlib is installed, a plot.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from dynalab import RunConfig, Sandbox
from dynalab.logging_config import setup_logging

OUT_DIR = Path(__file__).resolve().parent


def main() -> None:
    setup_logging()
    sandbox = Sandbox(config=RunConfig(dt=0.05, horizon=5.0), variant_id="oscillator")
    for key, value in {"mass": 1.2, "k": 12.0, "c": 0.6, "F": 1.8}.items():
        sandbox.set_parameter(key, value)

    session = sandbox.run_until_complete()
    view = sandbox.view()
    print(f"Status: {view.status}, steps: {view.step}, t = {view.time:.3f}, energy = {view.metric:.4f}")

    csv_path = OUT_DIR / "oscillator_history.csv"
    session.history.to_csv(csv_path, labels=view.series_labels)
    print(f"History ({len(session.history)} samples) -> {csv_path}")

    try:
        import matplotlib.pyplot as plt
        from dynalab.simulation import plot_history, plot_phase_portrait

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 4))
        plot_history(session.history, labels=view.series_labels, ax=ax1, title="Oscillator")
        plot_phase_portrait(session.history, labels=view.series_labels, ax=ax2)
        plt.tight_layout()
        plt.savefig(OUT_DIR / "oscillator.png", dpi=120)
        plt.close(fig)
        print("Saved oscillator.png")
    except ImportError:
        print("matplotlib not available, skip saving plots")


if __name__ == "__main__":
    main()
