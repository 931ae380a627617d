"""
Database Models (SQLAlchemy ORM)
Append-only history tables
"""

import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum as SQLEnum, Float, Integer, String, Text

from portfolio_advisor.infrastructure.db.database import Base
from portfolio_advisor.utils.time import utc_now_naive


# Enums
class RegimeEnum(str, enum.Enum):
    BULL = "bull"
    BEAR = "bear"
    NEUTRAL = "neutral"


class SleeveTypeEnum(str, enum.Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"


class UpdateTypeEnum(str, enum.Enum):
    SIGNALS = "signals"
    PORTFOLIO = "portfolio"
    ALL = "all"


# Tables

class SignalHistoryModel(Base):
    """Regime decision snapshot"""
    __tablename__ = "signal_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    regime = Column(SQLEnum(RegimeEnum), nullable=False)
    confidence = Column(Float, nullable=False)
    bull_count = Column(Integer, nullable=False)
    bear_count = Column(Integer, nullable=False)
    bull_signals = Column(JSON, nullable=False)
    bear_signals = Column(JSON, nullable=False)
    allocation = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)


class PortfolioRecommendationModel(Base):
    """Selected holdings for one sleeve"""
    __tablename__ = "portfolio_recommendation"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(SQLEnum(SleeveTypeEnum), nullable=False)
    regime = Column(SQLEnum(RegimeEnum), nullable=True)
    holdings = Column(JSON, nullable=False)
    total_holdings = Column(Integer, nullable=False)
    using_fallback = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)


class DataUpdateHistoryModel(Base):
    """Outcome of a manual or scheduled refresh"""
    __tablename__ = "data_update_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    update_type = Column(SQLEnum(UpdateTypeEnum), nullable=False, index=True)
    success = Column(Boolean, nullable=False)
    used_fallback = Column(Boolean, nullable=False, default=False)
    fallback_count = Column(Integer, nullable=True)
    fallback_reason = Column(Text, nullable=True)
    regime = Column(SQLEnum(RegimeEnum), nullable=True)
    holdings_count = Column(Integer, nullable=True)
    source = Column(String(20), nullable=False, default="manual")
    duration_ms = Column(Integer, nullable=False)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive, index=True)
