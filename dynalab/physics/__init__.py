"""
Physics models for the sandbox.

Hierarchy:
  - integrators: fixed-step explicit integration of named-field states
    (Euler, Midpoint, Heun, RK4)
  - library: ready-made variants (DampedDrivenOscillator, PredatorPrey, ThermalNetwork)
  - registry: VariantRegistry and default_registry()
"""

# --- Integrators (numerical level) ---
from dynalab.physics.integrators import (
    EulerIntegrator,
    HeunIntegrator,
    MidpointIntegrator,
    RK4Integrator,
    check_fields,
    euler_step,
    get_integrator,
    heun_step,
    midpoint_step,
    rk4_step,
)

# --- Library (variants) ---
from dynalab.physics.library import DampedDrivenOscillator, PredatorPrey, ThermalNetwork

# --- Registry ---
from dynalab.physics.registry import VariantRegistry, default_registry

__all__ = [
    # Integratori
    "EulerIntegrator",
    "MidpointIntegrator",
    "HeunIntegrator",
    "RK4Integrator",
    "euler_step",
    "midpoint_step",
    "heun_step",
    "rk4_step",
    "check_fields",
    "get_integrator",
    # Library
    "DampedDrivenOscillator",
    "PredatorPrey",
    "ThermalNetwork",
    # Registry
    "VariantRegistry",
    "default_registry",
]
