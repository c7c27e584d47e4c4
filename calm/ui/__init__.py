"""UI package."""

from .progress_view import ProgressView, TimeLabel
from .dialogs import IntervalDialog, select_interval, confirm_abandon

__all__ = [
    "ProgressView",
    "TimeLabel",
    "IntervalDialog",
    "select_interval",
    "confirm_abandon",
]
