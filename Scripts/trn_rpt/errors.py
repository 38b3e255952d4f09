"""
Error types raised while loading the training dataset or writing reports.

Input errors are fatal to a run; output errors are isolated per artifact.
"""
from __future__ import annotations
from pathlib import Path


class TrainingDataError(Exception):
    """Base error for the training report pipeline."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(self.message)


class InputUnreadable(TrainingDataError):
    """The source dataset could not be obtained."""


class InputMalformed(TrainingDataError):
    """The source dataset could not be parsed into the employee/completion shape."""


class OutputUnwritable(TrainingDataError):
    """A derived report could not be persisted."""


class SettingsInvalid(TrainingDataError):
    """A run setting has a value the reports cannot use."""
