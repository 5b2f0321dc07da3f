"""setup_logging: one stdout handler on the 'dynalab' logger."""

import logging

from dynalab import RunConfig, Sandbox
from dynalab.logging_config import setup_logging


def test_setup_logging_is_idempotent(tmp_path) -> None:
    log_file = tmp_path / "dynalab.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    try:
        assert logger.name == "dynalab"
        assert len(logger.handlers) == 2
        Sandbox(config=RunConfig(dt=0.1, horizon=0.1)).run_until_complete()
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Selected variant 'oscillator'" in text
        assert "Completed oscillator" in text
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
