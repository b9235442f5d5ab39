"""
Asset configuration endpoints.
"""
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from src.api.dependencies import get_signal_service
from src.core.signal_service import SignalService

router = APIRouter()

class AssetConfigResponse(BaseModel):
    id: int
    asset: str
    name: Optional[str]
    is_monitored: str
    category: Optional[str]
    last_signal_at: Optional[datetime]
    total_signals: int
    win_rate: Optional[Decimal]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

@router.get("/", response_model=List[AssetConfigResponse])
def list_assets(service: SignalService = Depends(get_signal_service)):
    """
    List configured assets ordered by symbol.
    """
    return service.list_assets()

@router.put("/{asset}", response_model=AssetConfigResponse)
def upsert_asset(
    asset: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: SignalService = Depends(get_signal_service)
):
    """
    Create or update an asset's configuration.
    """
    return service.upsert_asset(asset, payload or {})
