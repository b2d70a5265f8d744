from fastapi import APIRouter, Depends
from typing import List

from inventory_api.schemas.api_schemas import DashboardStatsResponse, DashboardModel
from inventory_api.dependencies import get_current_user, get_dashboard_service, get_model_service
from inventory_api.application.authorization import AuthenticatedUser
from inventory_api.application.dashboard_service import DashboardService
from inventory_api.application.model_service import ModelService

router = APIRouter()


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Totals of models, users and downloads, recomputed on each call.
    """
    stats = service.stats()
    return DashboardStatsResponse(
        totalModels=stats["total_models"],
        totalUsers=stats["total_users"],
        totalDownloads=stats["total_downloads"],
    )


@router.get("/dashboard-models", response_model=List[DashboardModel])
def get_dashboard_models(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    Model listing reduced to dashboard fields with download counts.
    """
    return service.dashboard_models()
