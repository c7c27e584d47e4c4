#!/usr/bin/env python3
"""Calm — entry point.

Run with:
    python main.py
    python -m calm
"""

from calm.__main__ import main


if __name__ == "__main__":
    main()
