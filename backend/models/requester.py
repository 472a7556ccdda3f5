"""
Requester entities. Beneficiary / package counts are never stored on them:
see statistics_service.organization_summary / family_summary.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from models.common import AccountStatus


class Organization(BaseModel):
    organization_id: str
    name:            str
    type:            str = "ngo"          # "ngo", "charity", "un_agency", ...
    phone:           str = ""
    email:           str = ""
    address:         str = ""
    status:          AccountStatus = AccountStatus.ACTIVE
    created_at:      datetime
    updated_at:      datetime


class OrganizationCreate(BaseModel):
    name:    str
    type:    str = "ngo"
    phone:   str = ""
    email:   str = ""
    address: str = ""
    status:  AccountStatus = AccountStatus.ACTIVE


class OrganizationUpdate(BaseModel):
    name:    Optional[str]           = None
    type:    Optional[str]           = None
    phone:   Optional[str]           = None
    email:   Optional[str]           = None
    address: Optional[str]           = None
    status:  Optional[AccountStatus] = None


class Family(BaseModel):
    family_id:      str
    name:           str
    head_of_family: str = ""
    phone:          str = ""
    members_count:  int = 1
    status:         AccountStatus = AccountStatus.ACTIVE
    created_at:     datetime
    updated_at:     datetime


class FamilyCreate(BaseModel):
    name:           str
    head_of_family: str = ""
    phone:          str = ""
    members_count:  int = Field(1, ge=1)
    status:         AccountStatus = AccountStatus.ACTIVE


class FamilyUpdate(BaseModel):
    name:           Optional[str]           = None
    head_of_family: Optional[str]           = None
    phone:          Optional[str]           = None
    members_count:  Optional[int]           = Field(None, ge=1)
    status:         Optional[AccountStatus] = None
