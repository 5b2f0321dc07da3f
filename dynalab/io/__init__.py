"""Input/output: configurazioni di run su file JSON."""

from dynalab.io.serializers import load_config, load_run_config, save_config

__all__ = ["save_config", "load_config", "load_run_config"]
