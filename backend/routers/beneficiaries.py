"""
Router beneficiaries: registration, profile, identity review, lookups.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from core.dependencies import get_current_admin
from models.beneficiary import AccountStatusUpdate, BeneficiaryCreate, BeneficiaryUpdate, IdentityDecision
from services import beneficiary_service, lookup_service

router = APIRouter()


@router.post("", summary="Register a beneficiary")
async def create_beneficiary(body: BeneficiaryCreate):
    return await beneficiary_service.create_beneficiary(body)


@router.get("", summary="Search beneficiaries")
async def list_beneficiaries(
    search: Optional[str] = None,
    status: Optional[str] = None,
    identity_status: Optional[str] = None,
    organization_id: Optional[str] = None,
    family_id: Optional[str] = None,
):
    beneficiaries = await lookup_service.search_beneficiaries(
        search, status, identity_status, organization_id, family_id,
    )
    return {"beneficiaries": beneficiaries, "total": len(beneficiaries)}


@router.get("/by-area", summary="Beneficiaries in a governorate / city / district")
async def beneficiaries_by_area(
    governorate: Optional[str] = None,
    city: Optional[str] = None,
    district: Optional[str] = None,
):
    beneficiaries = await lookup_service.beneficiaries_by_area(governorate, city, district)
    return {"beneficiaries": beneficiaries, "total": len(beneficiaries)}


@router.get("/{beneficiary_id}", summary="Beneficiary detail")
async def get_beneficiary(beneficiary_id: str):
    return await beneficiary_service.get_beneficiary(beneficiary_id)


@router.put("/{beneficiary_id}", summary="Update profile fields")
async def update_beneficiary(beneficiary_id: str, body: BeneficiaryUpdate):
    return await beneficiary_service.update_beneficiary(beneficiary_id, body)


@router.put("/{beneficiary_id}/identity", summary="Identity review decision")
async def set_identity_status(
    beneficiary_id: str,
    body: IdentityDecision,
    admin_id: str = Depends(get_current_admin),
):
    return await beneficiary_service.set_identity_status(
        beneficiary_id, body.identity_status, admin_id, notes=body.notes,
    )


@router.put("/{beneficiary_id}/status", summary="Activate / suspend an account")
async def set_account_status(beneficiary_id: str, body: AccountStatusUpdate):
    return await beneficiary_service.set_account_status(beneficiary_id, body.status)
