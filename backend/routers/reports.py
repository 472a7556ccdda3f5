"""
Router reports: statistics dashboards, always computed from live records.
"""
from fastapi import APIRouter

from services import statistics_service

router = APIRouter()


@router.get("", summary="Comprehensive report")
async def comprehensive_report():
    return await statistics_service.comprehensive_report()


@router.get("/beneficiaries", summary="Beneficiary statistics")
async def beneficiary_statistics():
    return await statistics_service.beneficiary_statistics()


@router.get("/couriers", summary="Courier statistics")
async def courier_statistics():
    return await statistics_service.courier_statistics()


@router.get("/tasks", summary="Task statistics")
async def task_statistics():
    return await statistics_service.task_statistics()
