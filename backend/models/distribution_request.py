from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from models.common import Priority, RequestStatus, RequestType, RequesterType


class DistributionRequest(BaseModel):
    request_id:              str             # "req_xxxxxxxxxxxx"
    # Requester (immutable after creation)
    requester_id:            str
    requester_type:          RequesterType
    requester_name:          str
    # Classification
    type:                    RequestType
    priority:                Priority = Priority.NORMAL
    package_template_id:     str
    # Target (immutable): explicit ids for individual / family_bulk, area for bulk
    beneficiary_ids:         List[str] = []
    target_governorate:      Optional[str] = None
    target_city:             Optional[str] = None
    target_district:         Optional[str] = None
    # Quantities
    requested_quantity:      int
    approved_quantity:       Optional[int] = None   # set on approval only
    # Status machine
    status:                  RequestStatus = RequestStatus.PENDING
    request_date:            datetime
    notes:                   str = ""
    estimated_cost:          float
    estimated_delivery_time: str
    # Disposition metadata, null until approve / reject
    assigned_courier_id:     Optional[str] = None
    admin_notes:             Optional[str] = None
    approved_by:             Optional[str] = None
    approval_date:           Optional[datetime] = None
    rejection_reason:        Optional[str] = None
    # Filled exactly once, at approval
    generated_task_ids:      List[str] = []
    created_at:              datetime
    updated_at:              datetime


class DistributionRequestCreate(BaseModel):
    requester_id:        str
    requester_type:      RequesterType
    requester_name:      str
    type:                RequestType
    package_template_id: str
    requested_quantity:  int
    beneficiary_ids:     List[str] = []
    target_governorate:  Optional[str] = None
    target_city:         Optional[str] = None
    target_district:     Optional[str] = None
    priority:            Priority = Priority.NORMAL
    notes:               str = ""


class ApproveRequestBody(BaseModel):
    approved_quantity: int
    courier_id:        str
    admin_notes:       Optional[str] = None


class RejectRequestBody(BaseModel):
    rejection_reason: str


class RequestEvent(BaseModel):
    event_id:    str
    request_id:  str
    event_type:  str            # "REQUEST_CREATED", "STATUS_CHANGED"
    from_status: Optional[RequestStatus] = None
    to_status:   Optional[RequestStatus] = None
    actor_id:    Optional[str] = None
    notes:       Optional[str] = None
    metadata:    Dict[str, Any] = {}
    created_at:  datetime
