"""Database package."""

from .db import get_session, init_db
from .models import InstanceState
from .instance_state import (
    save_instance_state,
    load_instance_state,
    restore_instance_state,
)

__all__ = [
    "get_session",
    "init_db",
    "InstanceState",
    "save_instance_state",
    "load_instance_state",
    "restore_instance_state",
]
