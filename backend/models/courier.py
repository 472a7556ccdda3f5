from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from models.common import CourierStatus, GeoPin


class Courier(BaseModel):
    courier_id:               str
    name:                     str
    phone:                    str
    email:                    str = ""
    status:                   CourierStatus = CourierStatus.ACTIVE
    # Gate for humanitarian aid deliveries
    is_humanitarian_approved: bool  = False
    rating:                   float = 0.0     # 0 – 5
    completed_tasks:          int   = 0
    current_location:         Optional[GeoPin] = None
    service_areas:            List[str] = []  # district / city names
    created_at:               datetime
    updated_at:               datetime


class CourierCreate(BaseModel):
    name:                     str
    phone:                    str
    email:                    str = ""
    status:                   CourierStatus = CourierStatus.ACTIVE
    is_humanitarian_approved: bool = False
    current_location:         Optional[GeoPin] = None
    service_areas:            List[str] = []


class CourierUpdate(BaseModel):
    name:                     Optional[str]           = None
    phone:                    Optional[str]           = None
    email:                    Optional[str]           = None
    status:                   Optional[CourierStatus] = None
    is_humanitarian_approved: Optional[bool]          = None
    rating:                   Optional[float]         = Field(None, ge=0, le=5)
    service_areas:            Optional[List[str]]     = None


class LocationUpdate(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
