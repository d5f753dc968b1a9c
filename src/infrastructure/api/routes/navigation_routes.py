from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.dtos.page_dto import LayoutDTO, ScreenChangeRequest, ScreenChangeResponse
from src.application.navigation import EventNavigation, NavigationChannel, RecordingNavigator
from src.application.views.layout import LayoutShell
from src.infrastructure.api.dependencies import get_navigation_channel

router = APIRouter(prefix="/layout", tags=["Navigation"])


@router.post(
    "/screen",
    response_model=ScreenChangeResponse,
    summary="Switch Screen",
    description="""
    Ask the profile layout to switch screens.

    `events` and `bands` only exist on the main page, so for those the
    response carries `redirect_to: "/"` and the layout is unchanged. Any other
    screen becomes the highlighted one.
    """,
)
async def change_screen(body: ScreenChangeRequest, channel: NavigationChannel = Depends(get_navigation_channel)):
    navigator = RecordingNavigator()
    shell = LayoutShell(
        EventNavigation(navigator, channel),
        viewport_width=body.viewport_width,
        is_current_user=body.is_current_user,
    )
    shell.change_screen(body.screen)
    return ScreenChangeResponse(redirect_to=navigator.location, layout=LayoutDTO(**shell.to_dict()))
