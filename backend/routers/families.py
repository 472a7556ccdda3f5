"""
Router families: households filing requests, with derived counts.
"""
from typing import Optional

from fastapi import APIRouter

from models.requester import FamilyCreate, FamilyUpdate
from services import lookup_service, requester_service

router = APIRouter()


@router.post("", summary="Create a family")
async def create_family(body: FamilyCreate):
    return await requester_service.create_family(body)


@router.get("", summary="List families")
async def list_families(search: Optional[str] = None, status: Optional[str] = None):
    families = await requester_service.list_families(search, status)
    return {"families": families, "total": len(families)}


@router.get("/{family_id}", summary="Family detail")
async def get_family(family_id: str):
    return await requester_service.get_family(family_id)


@router.get("/{family_id}/members", summary="Beneficiaries of a family")
async def family_members(family_id: str):
    await requester_service.get_family(family_id)
    return {"beneficiaries": await lookup_service.beneficiaries_by_family(family_id)}


@router.put("/{family_id}", summary="Update a family")
async def update_family(family_id: str, body: FamilyUpdate):
    return await requester_service.update_family(family_id, body)
