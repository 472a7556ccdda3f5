"""
Router couriers: roster, approval flag, position, nearby work.
"""
from typing import Optional

from fastapi import APIRouter

from models.courier import CourierCreate, CourierUpdate, LocationUpdate
from services import courier_service, lookup_service

router = APIRouter()


@router.post("", summary="Add a courier")
async def create_courier(body: CourierCreate):
    return await courier_service.create_courier(body)


@router.get("", summary="List couriers")
async def list_couriers(
    status: Optional[str] = None,
    approved_only: bool = False,
    search: Optional[str] = None,
):
    couriers = await courier_service.list_couriers(status, approved_only, search)
    return {"couriers": couriers, "total": len(couriers)}


@router.get("/by-area/{area}", summary="Active couriers serving an area")
async def couriers_by_area(area: str):
    return {"couriers": await lookup_service.couriers_by_service_area(area)}


@router.get("/{courier_id}", summary="Courier detail")
async def get_courier(courier_id: str):
    return await courier_service.get_courier(courier_id)


@router.put("/{courier_id}", summary="Update a courier")
async def update_courier(courier_id: str, body: CourierUpdate):
    return await courier_service.update_courier(courier_id, body)


@router.put("/{courier_id}/location", summary="Update current position")
async def update_location(courier_id: str, body: LocationUpdate):
    return await courier_service.update_location(courier_id, body)


@router.get("/{courier_id}/nearby-tasks", summary="Other couriers' tasks close to this courier")
async def nearby_tasks(courier_id: str, radius_km: Optional[float] = None):
    tasks = await lookup_service.nearby_tasks(courier_id, radius_km)
    return {"tasks": tasks, "total": len(tasks)}


@router.delete("/{courier_id}", summary="Remove a courier without active tasks")
async def delete_courier(courier_id: str):
    await courier_service.delete_courier(courier_id)
    return {"deleted": courier_id}
