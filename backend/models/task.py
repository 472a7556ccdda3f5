from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from models.common import TaskStatus


class Task(BaseModel):
    task_id:             str
    request_id:          str     # parent request, tasks stay mutable afterwards
    beneficiary_id:      str
    package_template_id: str
    courier_id:          Optional[str] = None
    status:              TaskStatus = TaskStatus.PENDING
    notes:               Optional[str] = None
    failure_reason:      Optional[str] = None   # "absent", "unreachable_area", ...
    created_at:          datetime
    scheduled_at:        Optional[datetime] = None
    delivered_at:        Optional[datetime] = None
    updated_at:          datetime


class TaskStatusUpdate(BaseModel):
    status:         TaskStatus
    notes:          Optional[str] = None
    failure_reason: Optional[str] = None
    scheduled_at:   Optional[datetime] = None   # for rescheduled


class TaskAssignment(BaseModel):
    courier_id: str
