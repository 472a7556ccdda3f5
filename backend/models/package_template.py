from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from models.common import PackageCategory, TemplateStatus


class ContentItem(BaseModel):
    name:     str
    quantity: float = Field(..., gt=0)
    unit:     str                     # "kg", "piece", "liter"


class PackageTemplate(BaseModel):
    template_id:    str
    name:           str
    category:       PackageCategory
    contents:       List[ContentItem] = []
    total_weight:   float = 0.0         # kg
    estimated_cost: float               # per unit, settings.CURRENCY
    status:         TemplateStatus = TemplateStatus.ACTIVE
    usage_count:    int = 0             # requests referencing this template
    created_at:     datetime
    updated_at:     datetime


class PackageTemplateCreate(BaseModel):
    name:           str
    category:       PackageCategory
    contents:       List[ContentItem] = []
    total_weight:   Optional[float] = Field(None, ge=0)
    estimated_cost: float = Field(..., ge=0)


class TemplateStatusUpdate(BaseModel):
    status: TemplateStatus
