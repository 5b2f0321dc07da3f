"""
Live sandbox on an asyncio loop: one tick per frame, with scripted
user events (parameter edits, pause/resume, variant switch) arriving
between ticks, as they would from a UI.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from dynalab import RunConfig, Sandbox
from dynalab.core import AsyncioTaskHost, Status
from dynalab.io import load_run_config
from dynalab.logging_config import setup_logging


def print_frame(sandbox: Sandbox) -> None:
    view = sandbox.view()
    last = view.history[-1] if view.history else None
    series = f"{last.primary:+.3f} {last.secondary:+.3f}" if last else "-"
    metric = f"{view.metric:.4f}" if view.metric is not None else "-"
    print(f"[{view.variant_id:>13}] {view.status:<9} t={view.time:7.3f} step={view.step:5d} "
          f"metric={metric} series={series}")


async def session(sandbox: Sandbox, frames: int) -> None:
    sandbox.run()
    for frame in range(frames):
        await asyncio.sleep(sandbox.config.tick_interval)
        if frame % 30 == 0:
            print_frame(sandbox)
        if frame == 60:
            sandbox.set_parameter(sandbox.parameters.specs()[0].key, 1e9)  # clamped to max
        if frame == 90:
            sandbox.pause()
        if frame == 120:
            sandbox.run()
        if sandbox.status is not Status.RUNNING and sandbox.status is not Status.PAUSED:
            break
    print_frame(sandbox)


def main() -> None:
    parser = argparse.ArgumentParser(description="dynalab live sandbox")
    parser.add_argument("--variant", default="oscillator", choices=["oscillator", "predator_prey", "thermal"])
    parser.add_argument("--config", type=Path, help="JSON run configuration (dt, horizon, method, ...)")
    parser.add_argument("--frames", type=int, default=300)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    config = load_run_config(args.config) if args.config else RunConfig(dt=0.05, horizon=10.0)

    async def run() -> None:
        sandbox = Sandbox(
            host=AsyncioTaskHost(interval=config.tick_interval),
            config=config,
            variant_id=args.variant,
        )
        await session(sandbox, args.frames)

    asyncio.run(run())


if __name__ == "__main__":
    main()
