"""SQLAlchemy ORM models for Calm."""

from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class InstanceState(Base):
    """Single-row table holding the timer state saved at shutdown.

    Every field is nullable: a missing value is filled in by the engine's
    restore fallbacks rather than rejected.
    """

    __tablename__ = "instance_state"

    id = Column(Integer, primary_key=True, autoincrement=True)
    interval_ms = Column(Integer, nullable=True)
    adjusted_interval_ms = Column(Integer, nullable=True)
    remaining_interval_ms = Column(Integer, nullable=True)
    running = Column(Boolean, nullable=True)
    saved_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<InstanceState interval={self.interval_ms} "
            f"remaining={self.remaining_interval_ms} running={self.running}>"
        )
