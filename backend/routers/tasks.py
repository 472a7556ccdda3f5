"""
Router tasks: per-beneficiary deliveries and their state machine.
"""
from typing import Optional

from fastapi import APIRouter

from models.task import TaskAssignment, TaskStatusUpdate
from services import task_service

router = APIRouter()


@router.get("", summary="List tasks")
async def list_tasks(
    courier_id: Optional[str] = None,
    request_id: Optional[str] = None,
    beneficiary_id: Optional[str] = None,
    status: Optional[str] = None,
):
    tasks = await task_service.list_tasks(courier_id, request_id, beneficiary_id, status)
    return {"tasks": tasks, "total": len(tasks)}


@router.get("/{task_id}", summary="Task detail")
async def get_task(task_id: str):
    return await task_service.get_task(task_id)


@router.put("/{task_id}/status", summary="Move a task along its state machine")
async def update_task_status(task_id: str, body: TaskStatusUpdate):
    return await task_service.update_task_status(
        task_id,
        body.status,
        notes=body.notes,
        failure_reason=body.failure_reason,
        scheduled_at=body.scheduled_at,
    )


@router.put("/{task_id}/assign", summary="Assign a pending or rescheduled task")
async def assign_task(task_id: str, body: TaskAssignment):
    return await task_service.assign_task(task_id, body.courier_id)
