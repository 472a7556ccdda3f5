from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from models.common import AlertPriority, AlertType


class Alert(BaseModel):
    alert_id:     str
    type:         AlertType
    title:        str
    description:  str
    related_id:   Optional[str] = None
    related_type: Optional[str] = None   # "distribution_request", "task", "beneficiary"
    priority:     AlertPriority = AlertPriority.MEDIUM
    is_read:      bool = False
    created_at:   datetime


class AlertCreate(BaseModel):
    type:         AlertType
    title:        str
    description:  str
    related_id:   Optional[str] = None
    related_type: Optional[str] = None
    priority:     AlertPriority = AlertPriority.MEDIUM
