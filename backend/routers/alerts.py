"""
Router alerts: admin inbox.
"""
from typing import Optional

from fastapi import APIRouter

from models.alert import AlertCreate
from services import alert_service

router = APIRouter()


@router.get("", summary="List alerts, newest first")
async def list_alerts(unread_only: bool = False, priority: Optional[str] = None):
    alerts = await alert_service.list_alerts(unread_only, priority)
    unread = await alert_service.unread_alerts()
    return {"alerts": alerts, "total": len(alerts), "unread": len(unread)}


@router.get("/critical", summary="Unread critical alerts")
async def critical_alerts():
    return {"alerts": await alert_service.critical_alerts()}


@router.post("", summary="Raise a manual alert")
async def create_alert(body: AlertCreate):
    return await alert_service.create_alert(body)


@router.put("/{alert_id}/read", summary="Mark an alert as read")
async def mark_alert_read(alert_id: str):
    return await alert_service.mark_alert_read(alert_id)


@router.delete("/{alert_id}", summary="Remove an alert")
async def remove_alert(alert_id: str):
    await alert_service.remove_alert(alert_id)
    return {"deleted": alert_id}


@router.delete("", summary="Clear every alert")
async def clear_alerts():
    return {"deleted": await alert_service.clear_alerts()}
