from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RefreshResponse(BaseModel):
    scope: str
    success: bool
    duration_ms: int
    completed_at: datetime
    source: str
    regime: Optional[str] = None
    used_fallback: bool
    fallback_count: int
    fallback_reason: Optional[str] = None
    holdings_count: Optional[int] = None
    error_message: Optional[str] = None


class CacheStatsResponse(BaseModel):
    size: int
    hits: int
    misses: int
    hit_rate: float
    inflight: int


class UpdateHistoryResponse(BaseModel):
    id: int
    update_type: str
    success: bool
    used_fallback: bool
    fallback_count: Optional[int] = None
    fallback_reason: Optional[str] = None
    regime: Optional[str] = None
    holdings_count: Optional[int] = None
    source: str
    duration_ms: int
    error_message: Optional[str] = None
    created_at: datetime
