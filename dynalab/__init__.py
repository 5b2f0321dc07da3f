"""
dynalab: sandbox interattivo per piccoli sistemi dinamici (ODE + RK4).
"""

__version__ = "0.1.0"

from dynalab.config import RunConfig
from dynalab.core.component import ModelVariant
from dynalab.core.signals import ParameterSpec
from dynalab.core.system import Sandbox, SandboxView

__all__ = [
    "__version__",
    "Sandbox",
    "SandboxView",
    "ModelVariant",
    "ParameterSpec",
    "RunConfig",
]
