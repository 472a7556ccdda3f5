"""
Router templates: package catalogue.
"""
from typing import Optional

from fastapi import APIRouter

from models.package_template import PackageTemplateCreate, TemplateStatusUpdate
from services import template_service

router = APIRouter()


@router.post("", summary="Create a package template")
async def create_template(body: PackageTemplateCreate):
    return await template_service.create_template(body)


@router.get("", summary="List package templates")
async def list_templates(category: Optional[str] = None, status: Optional[str] = None):
    templates = await template_service.list_templates(category, status)
    return {"templates": templates, "total": len(templates)}


@router.get("/{template_id}", summary="Template detail")
async def get_template(template_id: str):
    return await template_service.get_template(template_id)


@router.put("/{template_id}/status", summary="Activate / deactivate a template")
async def set_template_status(template_id: str, body: TemplateStatusUpdate):
    return await template_service.set_template_status(template_id, body.status)
