from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
from .database import Base


class EstimateSession(Base):
    """One estimation session — engine state for a single quote context."""
    __tablename__ = "estimate_sessions"

    id = Column(String, primary_key=True)  # UUID
    family = Column(String, nullable=False)  # 'cargo' | 'anti_heeling'
    project_id = Column(String, nullable=True)  # Owning project, managed elsewhere
    catalog_version = Column(String, nullable=True)
    state_json = Column(JSON, default=dict)  # Serialized EngineState
    status = Column(String, default="active")  # 'active' | 'priced'
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class EstimateSnapshot(Base):
    """Last captured (price, flow spec) per session/project key — one slot, no history."""
    __tablename__ = "estimate_snapshots"

    key = Column(String, primary_key=True)
    snapshot_json = Column(JSON, nullable=False)
    captured_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
