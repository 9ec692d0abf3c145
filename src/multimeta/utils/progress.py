"""
Progress reporting for the meta-analysis checkpoints.

A progress reporter is any callable ``progress(step, status)``. ``step`` is
one of ``"validate"``, ``"combine"`` or ``"write"``; ``status`` is
``"start"`` or ``"done"``.
"""

import logging

from multimeta.config.settings import get_settings

STEP_MESSAGES = {
    "validate": "checking data",
    "combine": "meta-analysis",
    "write": "writing results",
}


class LoggingProgress:
    """Report checkpoints on the ``multimeta`` logger."""

    def __init__(self, logger=None, level=logging.INFO):
        self.logger = logger if logger is not None else logging.getLogger("multimeta")
        self.level = level

    def __call__(self, step, status):
        message = STEP_MESSAGES.get(step, step)
        if status == "start":
            self.logger.log(self.level, f"{message} ...")
        else:
            self.logger.log(self.level, f"{message} ... OK")


class RecordingProgress:
    """Keep the sequence of (step, status) events, e.g. for inspection in tests."""

    def __init__(self):
        self.events = []

    def __call__(self, step, status):
        self.events.append((step, status))

    def completed(self):
        return [step for step, status in self.events if status == "done"]


def silent_progress(step, status):
    """Progress reporter that ignores every event."""


def configure_logging(level=None):
    """Set up root logging for command line use."""
    if level is None:
        level = get_settings().LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
