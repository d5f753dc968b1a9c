from __future__ import annotations

from pydantic import BaseModel, Field

from src.application.dtos.profile_dto import ProfileResponse


class NavItemDTO(BaseModel):
    id: str = Field(..., examples=["events"])
    label: str = Field(..., examples=["Events"])
    active: bool


class LayoutDTO(BaseModel):
    """Navigation chrome projected for the caller's viewport."""
    chrome: str = Field(..., description="side_panel or bottom_bar", examples=["side_panel"])
    viewport_width: int
    active_screen: str = Field("", description="Highlighted screen; empty on someone else's profile")
    items: list[NavItemDTO] = Field(default_factory=list)
    profile_active: bool | None = Field(None, description="Side panel only")
    selected_event: str | None = Field(None, description="Side panel only")


class ProfilePageResponse(BaseModel):
    state: str = Field(..., description="loading, error, not_found or profile", examples=["profile"])
    error: str | None = None
    profile: ProfileResponse | None = None
    layout: LayoutDTO | None = None


class ScreenChangeRequest(BaseModel):
    screen: str = Field(..., min_length=1, examples=["profile"])
    viewport_width: int = Field(1024, gt=0)
    is_current_user: bool = False


class ScreenChangeResponse(BaseModel):
    redirect_to: str | None = Field(None, description="Set when the screen lives on the main page", examples=["/"])
    layout: LayoutDTO
