from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.common_dto import DashboardResponse
from src.infrastructure.api.dependencies import get_session_user

# Everything here sits behind SessionGateMiddleware.
router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse, summary="Dashboard")
def dashboard(user=Depends(get_session_user)):
    return DashboardResponse(user_id=user.id, message="Welcome to your dashboard!")


@router.get("/{section:path}", response_model=DashboardResponse, summary="Dashboard Section")
def dashboard_section(section: str, user=Depends(get_session_user)):
    return DashboardResponse(user_id=user.id, message="Welcome to your dashboard!", section=section)
