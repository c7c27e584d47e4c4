"""Save and restore the timer across a process restart.

The engine never persists or re-arms itself.  At shutdown the host calls
:func:`save_instance_state`, which freezes the countdown and stores it;
at startup :func:`restore_instance_state` loads it back and restarts the
timer if it was running when saved.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..timer.engine import TimerEngine
from .db import get_session
from .models import InstanceState

LOGGER = logging.getLogger(__name__)

# engine snapshot key → column
_FIELDS = {
    "interval": "interval_ms",
    "adjusted_interval": "adjusted_interval_ms",
    "remaining_interval": "remaining_interval_ms",
}


def save_instance_state(engine: TimerEngine) -> bool:
    """Stop *engine* and store its state.  Returns the prior running flag."""
    running = engine.is_running()
    # Stopping freezes the resume point so the stored fields agree.
    engine.stop()
    snapshot = engine.snapshot().as_dict()

    with get_session() as db:
        record = db.query(InstanceState).first()
        if record is None:
            record = InstanceState()
            db.add(record)
        for key, column in _FIELDS.items():
            setattr(record, column, snapshot[key])
        record.running = running
        record.saved_at = datetime.now()

    LOGGER.info(
        "saved timer state: remaining=%d ms running=%s",
        snapshot["remaining_interval"], running,
    )
    return running


def load_instance_state() -> dict | None:
    """Return the stored fields that are present, or None when nothing is saved."""
    with get_session() as db:
        record = db.query(InstanceState).first()
        if record is None:
            return None
        state = {
            key: getattr(record, column)
            for key, column in _FIELDS.items()
            if getattr(record, column) is not None
        }
        state["running"] = bool(record.running)
    return state


def restore_instance_state(engine: TimerEngine) -> bool:
    """Restore *engine* from storage and restart it if it was running.

    Returns True when the timer was restarted.
    """
    state = load_instance_state()
    if state is None:
        return False

    running = state.pop("running")
    engine.restore(state)
    LOGGER.info(
        "restored timer state: remaining=%d ms running=%s",
        engine.get_remaining(), running,
    )
    if running:
        engine.start()
    return running and engine.is_running()
