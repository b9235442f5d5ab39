"""
Signal management endpoints.
"""
from fastapi import APIRouter, Body, Depends, Query, Response
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, field_validator
from datetime import datetime
from decimal import Decimal
from src.api.dependencies import get_signal_service
from src.core.signal_export import signals_to_csv
from src.core.signal_query import SignalFilters
from src.core.signal_service import SignalService
from src.utils.constants import DEFAULT_QUERY_LIMIT, MAX_QUERY_LIMIT
from src.utils.serialization import decode_json_field, utcnow

router = APIRouter()

class SignalResponse(BaseModel):
    id: int
    asset: str
    direction: str
    entry_price: Decimal
    confidence: Decimal
    strength: Decimal
    timeframe: str
    ema_9: Optional[Decimal] = None
    ema_20: Optional[Decimal] = None
    ema_50: Optional[Decimal] = None
    rsi: Optional[Decimal] = None
    adx: Optional[Decimal] = None
    bb_upper: Optional[Decimal] = None
    bb_middle: Optional[Decimal] = None
    bb_lower: Optional[Decimal] = None
    volume_ratio: Optional[Decimal] = None
    candle_pattern: Optional[str] = None
    pattern_strength: Optional[Decimal] = None
    reasons: List[str] = []
    filters: Dict[str, bool] = {}
    support_levels: List[float] = []
    resistance_levels: List[float] = []
    status: str
    result: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator('reasons', 'support_levels', 'resistance_levels', mode='before')
    @classmethod
    def decode_list(cls, value):
        return decode_json_field(value, default=[])

    @field_validator('filters', mode='before')
    @classmethod
    def decode_mapping(cls, value):
        return decode_json_field(value, default={})

class SignalHistoryResponse(BaseModel):
    id: int
    signal_id: int
    executed_at: Optional[datetime]
    amount: Optional[Decimal]
    entry_price: Optional[Decimal]
    exit_price: Optional[Decimal]
    profit: Optional[Decimal]
    profit_percent: Optional[Decimal]
    duration: Optional[int]
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True

class SignalStatsResponse(BaseModel):
    total_signals: int
    call_signals: int
    put_signals: int
    avg_confidence: float
    by_asset: Dict[str, int]

def _filters(
    asset: Optional[str] = Query(None, description="Filter by asset symbol (exact)"),
    direction: Optional[str] = Query(None, description="Filter by direction (call, put)"),
    status: Optional[str] = Query(None, description="Filter by status (pending, active, closed, expired)"),
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=1, le=MAX_QUERY_LIMIT, description="Maximum number of results"),
    offset: int = Query(0, ge=0, description="Results to skip"),
) -> SignalFilters:
    return SignalFilters(asset=asset, direction=direction, status=status, limit=limit, offset=offset)

@router.post("/", response_model=SignalResponse, status_code=201)
def create_signal(
    payload: Dict[str, Any] = Body(...),
    service: SignalService = Depends(get_signal_service)
):
    """
    Store a signal posted by the robot.
    Signals above the confidence threshold notify the owner.
    """
    return service.submit(payload)

@router.get("/", response_model=List[SignalResponse])
def list_signals(
    filters: SignalFilters = Depends(_filters),
    service: SignalService = Depends(get_signal_service)
):
    """
    List signals with optional filters, newest first.
    """
    return service.list_signals(filters)

@router.get("/stats/summary", response_model=SignalStatsResponse)
def signal_stats(service: SignalService = Depends(get_signal_service)):
    """
    Get signal statistics summary.
    """
    return service.stats().to_dict()

@router.get("/export.csv")
def export_signals(
    filters: SignalFilters = Depends(_filters),
    service: SignalService = Depends(get_signal_service)
):
    """
    Export the filtered signal list as CSV.
    """
    content = signals_to_csv(service.list_signals(filters))
    filename = f"signals-{utcnow().strftime('%Y%m%d-%H%M%S')}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.get("/{signal_id}", response_model=SignalResponse)
def get_signal(signal_id: int, service: SignalService = Depends(get_signal_service)):
    """
    Get specific signal by ID.
    """
    return service.get_signal(signal_id)

@router.patch("/{signal_id}", response_model=SignalResponse)
def update_signal(
    signal_id: int,
    payload: Dict[str, Any] = Body(...),
    service: SignalService = Depends(get_signal_service)
):
    """
    Update status/result once the outcome is known.
    """
    return service.update_signal(signal_id, payload)

@router.post("/{signal_id}/history", response_model=SignalHistoryResponse, status_code=201)
def record_history(
    signal_id: int,
    payload: Dict[str, Any] = Body(...),
    service: SignalService = Depends(get_signal_service)
):
    """
    Record the execution outcome of a signal.
    """
    return service.record_history(signal_id, payload)

@router.get("/{signal_id}/history", response_model=List[SignalHistoryResponse])
def get_history(signal_id: int, service: SignalService = Depends(get_signal_service)):
    """
    Execution outcomes recorded for a signal.
    """
    return service.get_history(signal_id)
