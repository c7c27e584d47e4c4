"""Calm: a single-screen meditation countdown timer."""

__version__ = "0.1.0"
