from typing import Optional
from fastapi import Header

from config import settings


async def get_current_admin(x_admin_id: Optional[str] = Header(None)) -> str:
    """
    Acting admin id, recorded on approvals, rejections and identity reviews.
    Authentication is handled upstream; without the header the configured
    default admin is used.
    """
    return (x_admin_id or "").strip() or settings.DEFAULT_ADMIN_ID
