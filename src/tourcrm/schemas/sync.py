"""Sync, radar and position schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .clients import ClientModel, CoordinateModel


class CloudConfigModel(BaseModel):
    provider: Literal["none", "supabase"] = "none"
    url: str = ""
    key: str = ""


class CloudConfigView(BaseModel):
    provider: Literal["none", "supabase"]
    url: str
    key_configured: bool


class SyncStatusModel(BaseModel):
    status: Literal["idle", "syncing", "saved", "error"]
    configured: bool
    pending_upload: bool
    last_synced_at: Optional[datetime] = None


class SyncActionResponse(BaseModel):
    status: Literal["idle", "syncing", "saved", "error"]
    clients: int


class RadarSettingsModel(BaseModel):
    active: Optional[bool] = None
    radius_km: Optional[float] = Field(default=None, gt=0)


class RadarHitModel(BaseModel):
    client: ClientModel
    distance_km: float


class RadarResponse(BaseModel):
    active: bool
    radius_km: float
    origin: Optional[CoordinateModel] = None
    items: List[RadarHitModel]


class PositionReadingModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    accuracy_m: Optional[float] = Field(default=None, ge=0)
    timestamp: Optional[datetime] = None


class PositionStatusModel(BaseModel):
    status: Literal["searching", "active", "error"]
    position: Optional[CoordinateModel] = None
    accuracy_m: Optional[float] = None
    timestamp: Optional[datetime] = None
