"""
Router organizations: NGOs and agencies filing requests, with derived counts.
"""
from typing import Optional

from fastapi import APIRouter

from models.requester import OrganizationCreate, OrganizationUpdate
from services import lookup_service, requester_service

router = APIRouter()


@router.post("", summary="Create an organization")
async def create_organization(body: OrganizationCreate):
    return await requester_service.create_organization(body)


@router.get("", summary="List organizations")
async def list_organizations(search: Optional[str] = None, status: Optional[str] = None):
    organizations = await requester_service.list_organizations(search, status)
    return {"organizations": organizations, "total": len(organizations)}


@router.get("/{organization_id}", summary="Organization detail")
async def get_organization(organization_id: str):
    return await requester_service.get_organization(organization_id)


@router.get("/{organization_id}/beneficiaries", summary="Beneficiaries of an organization")
async def organization_beneficiaries(organization_id: str):
    await requester_service.get_organization(organization_id)
    return {"beneficiaries": await lookup_service.beneficiaries_by_organization(organization_id)}


@router.put("/{organization_id}", summary="Update an organization")
async def update_organization(organization_id: str, body: OrganizationUpdate):
    return await requester_service.update_organization(organization_id, body)
