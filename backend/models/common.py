from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RequestStatus(str, Enum):
    PENDING     = "pending"
    APPROVED    = "approved"
    REJECTED    = "rejected"
    IN_PROGRESS = "in_progress"
    COMPLETED   = "completed"


class RequestType(str, Enum):
    INDIVIDUAL  = "individual"
    BULK        = "bulk"          # targets a geography, not explicit ids
    FAMILY_BULK = "family_bulk"


class RequesterType(str, Enum):
    ORGANIZATION = "organization"
    FAMILY       = "family"
    ADMIN        = "admin"


class Priority(str, Enum):
    LOW    = "low"
    NORMAL = "normal"
    HIGH   = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    PENDING     = "pending"
    ASSIGNED    = "assigned"
    IN_PROGRESS = "in_progress"
    DELIVERED   = "delivered"
    FAILED      = "failed"
    RESCHEDULED = "rescheduled"


class CourierStatus(str, Enum):
    ACTIVE  = "active"
    BUSY    = "busy"
    OFFLINE = "offline"


class IdentityStatus(str, Enum):
    PENDING  = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AccountStatus(str, Enum):
    ACTIVE    = "active"
    PENDING   = "pending"
    SUSPENDED = "suspended"


class TemplateStatus(str, Enum):
    ACTIVE   = "active"
    INACTIVE = "inactive"


class PackageCategory(str, Enum):
    FOOD      = "food"
    MEDICAL   = "medical"
    CLOTHING  = "clothing"
    HYGIENE   = "hygiene"
    EMERGENCY = "emergency"


class AlertType(str, Enum):
    PENDING_REQUESTS = "pending_requests"   # synthesized, see alert_service
    DELAYED          = "delayed"
    FAILED           = "failed"
    EXPIRED          = "expired"
    URGENT           = "urgent"
    SYSTEM           = "system"


class AlertPriority(str, Enum):
    LOW      = "low"
    MEDIUM   = "medium"
    HIGH     = "high"
    CRITICAL = "critical"


class GeoPin(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Address(BaseModel):
    governorate: str                  # "Khan Younis"
    city:        str
    district:    str
    street:      Optional[str] = None
