from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime
import enum

Base = declarative_base()

# ============================================================================
# ENUM DEFINITIONS
# ============================================================================

class NodeState(enum.IntEnum):
    """Node health derived from the age of its last inventory report"""
    UNKNOWN = 0
    HEALTHY = 1
    UNHEALTHY = 2

class PoolType(enum.IntEnum):
    """Storage pool redundancy scheme"""
    REPLICATED = 0
    ERASURE_CODED = 1

# ============================================================================
# COORDINATION STORE TABLES
# ============================================================================

class StoreEntry(Base):
    """One key/value pair of the coordination store (keys are /-separated paths)"""
    __tablename__ = "store_entries"

    id = Column(Integer, primary_key=True)
    key = Column(String, unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
