from datetime import datetime
from typing import Optional
from pydantic import BaseModel, model_validator
from models.common import AccountStatus, Address, GeoPin, IdentityStatus


class Beneficiary(BaseModel):
    beneficiary_id:  str
    name:            str
    full_name:       str = ""
    national_id:     str              # unique across beneficiaries
    phone:           str = ""
    address:         Address
    location:        Optional[GeoPin] = None
    # Affiliation: at most one of the two
    organization_id: Optional[str] = None
    family_id:       Optional[str] = None
    # Statuses (soft states only, never hard-deleted)
    identity_status: IdentityStatus = IdentityStatus.PENDING
    status:          AccountStatus  = AccountStatus.ACTIVE
    # Running totals, updated on task delivery
    total_packages:  int = 0
    last_received:   Optional[datetime] = None
    notes:           str = ""
    created_at:      datetime
    updated_at:      datetime


class BeneficiaryCreate(BaseModel):
    name:            str
    full_name:       str = ""
    national_id:     str
    phone:           str = ""
    address:         Address
    location:        Optional[GeoPin] = None
    organization_id: Optional[str] = None
    family_id:       Optional[str] = None
    notes:           str = ""

    @model_validator(mode="after")
    def single_affiliation(self):
        if self.organization_id and self.family_id:
            raise ValueError("A beneficiary belongs to an organization or a family, not both")
        return self


class BeneficiaryUpdate(BaseModel):
    name:            Optional[str]     = None
    full_name:       Optional[str]     = None
    phone:           Optional[str]     = None
    address:         Optional[Address] = None
    location:        Optional[GeoPin]  = None
    organization_id: Optional[str]     = None
    family_id:       Optional[str]     = None
    notes:           Optional[str]     = None

    @model_validator(mode="after")
    def single_affiliation(self):
        if self.organization_id and self.family_id:
            raise ValueError("A beneficiary belongs to an organization or a family, not both")
        return self


class IdentityDecision(BaseModel):
    identity_status: IdentityStatus
    notes:           Optional[str] = None


class AccountStatusUpdate(BaseModel):
    status: AccountStatus
