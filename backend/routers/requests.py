"""
Router requests: distribution requests, approval / rejection, timeline.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request

from config import settings
from core.dependencies import get_current_admin
from core.limiter import limiter
from models.distribution_request import ApproveRequestBody, DistributionRequestCreate, RejectRequestBody
from services import request_service
from services.lookup_service import eligible_couriers_for_request

router = APIRouter()


@router.post("", summary="Create a distribution request")
@limiter.limit(settings.CREATE_REQUEST_RATE_LIMIT)
async def create_request_endpoint(request: Request, body: DistributionRequestCreate):
    return await request_service.create_request(body)


@router.get("", summary="List distribution requests")
async def list_requests(
    status: Optional[str] = None,
    type: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
):
    requests = await request_service.list_requests(status, type, priority, search)
    return {"requests": requests, "total": len(requests)}


@router.get("/statistics", summary="Request counts by status and priority")
async def request_statistics():
    return await request_service.request_statistics()


@router.get("/{request_id}", summary="Request detail + timeline")
async def get_request(request_id: str):
    distribution_request = await request_service.get_request(request_id)
    timeline = await request_service.get_request_timeline(request_id)
    return {"request": distribution_request, "timeline": timeline}


@router.get("/{request_id}/eligible-couriers", summary="Couriers allowed to serve the request")
async def eligible_couriers(request_id: str):
    distribution_request = await request_service.get_request(request_id)
    return {"couriers": await eligible_couriers_for_request(distribution_request)}


@router.post("/{request_id}/approve", summary="Approve and generate delivery tasks")
async def approve_request(
    request_id: str,
    body: ApproveRequestBody,
    admin_id: str = Depends(get_current_admin),
):
    return await request_service.approve_request(
        request_id,
        approved_quantity=body.approved_quantity,
        courier_id=body.courier_id,
        admin_id=admin_id,
        admin_notes=body.admin_notes,
    )


@router.post("/{request_id}/reject", summary="Reject a pending request")
async def reject_request(
    request_id: str,
    body: RejectRequestBody,
    admin_id: str = Depends(get_current_admin),
):
    return await request_service.reject_request(request_id, body.rejection_reason, admin_id)
