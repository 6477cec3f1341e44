"""
Admin analytics API endpoints.

Routes:
- GET /admin/link-clicks - Most clicked links
- GET /admin/stats - Dashboard counters

Dependencies: chatppc.application.services, chatppc.models, chatppc.api.deps
System role: Admin analytics HTTP API
"""

from fastapi import APIRouter, Depends

from chatppc.api.deps import get_admin_service, require_admin_user
from chatppc.application.services.admin_service import AdminService
from chatppc.models.admin import LinkClickStatsResponse, StatsResponse

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_user)],
)


@router.get("/link-clicks", response_model=LinkClickStatsResponse)
async def get_link_clicks(
    page: int = 1,
    limit: int = 5,
    search: str = "",
    service: AdminService = Depends(get_admin_service),
) -> LinkClickStatsResponse:
    """Links grouped by URL, most clicked first."""
    return await service.list_link_clicks(page=page, limit=limit, search=search)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    service: AdminService = Depends(get_admin_service),
) -> StatsResponse:
    """Total conversations, active sessions, messages today, average length."""
    return await service.get_stats()
