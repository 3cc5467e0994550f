# fairgroup/infrastructure/models.py
"""
SQLAlchemy ORM models for roster sessions.

A roster session is opened, filled over any number of requests, grouped as
often as needed and finally closed (deleted together with its entries).
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from fairgroup.infrastructure.db.session import Base


def now():
    return datetime.now(timezone.utc)


class RosterSession(Base):
    __tablename__ = "rosters"

    id = Column(Integer, primary_key=True)
    label = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=now)

    entries = relationship(
        "RosterEntry",
        back_populates="roster",
        cascade="all, delete-orphan",
        order_by="RosterEntry.id",
    )


class RosterEntry(Base):
    __tablename__ = "roster_entries"
    __table_args__ = (UniqueConstraint("roster_id", "name", name="uq_roster_entry_name"),)

    id = Column(Integer, primary_key=True)
    roster_id = Column(Integer, ForeignKey("rosters.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    grade = Column(Float, nullable=False)

    roster = relationship("RosterSession", back_populates="entries")
