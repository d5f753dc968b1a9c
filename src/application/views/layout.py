from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from src.application.navigation import ROOT_ROUTE, EventNavigation

DESKTOP_MIN_WIDTH = 1024

# Screens that only exist in the main page's screen switcher.
ROOT_SCREENS = frozenset({"events", "bands"})


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    active: bool


@dataclass
class NavigationState:
    active_screen: str = ""
    selected_event: str | None = None


@dataclass(frozen=True)
class SidePanel:
    profile_active: bool
    items: tuple[NavItem, ...]
    selected_event: str | None
    kind: str = "side_panel"


@dataclass(frozen=True)
class BottomBar:
    items: tuple[NavItem, ...]
    kind: str = "bottom_bar"


def is_desktop(viewport_width: int) -> bool:
    return viewport_width >= DESKTOP_MIN_WIDTH


def project_side_panel(state: NavigationState) -> SidePanel:
    items = (("events", "Events"), ("bands", "Your Bands"))
    return SidePanel(
        profile_active=state.active_screen == "profile",
        items=tuple(NavItem(i, label, state.active_screen == i) for i, label in items),
        selected_event=state.selected_event,
    )


def project_bottom_bar(state: NavigationState) -> BottomBar:
    items = (("events", "Events"), ("bands", "Bands"), ("profile", "Profile"))
    return BottomBar(
        items=tuple(
            NavItem(
                i,
                label,
                state.active_screen == i or (i == "events" and state.active_screen == "event"),
            )
            for i, label in items
        )
    )


class LayoutShell:
    """Navigation chrome around a page's content.

    The state lives here once; ``chrome`` projects it into the side panel on
    wide viewports and into the bottom bar on narrow ones, never both.
    """

    def __init__(
        self,
        navigation: EventNavigation,
        viewport_width: int = DESKTOP_MIN_WIDTH,
        is_current_user: bool = False,
    ) -> None:
        self.navigation = navigation
        self.viewport_width = viewport_width
        self.is_current_user = is_current_user
        # someone else's profile: nothing in the chrome is "current"
        self.state = NavigationState(active_screen="profile" if is_current_user else "")
        self._teardown: Callable[[], None] | None = None

    @property
    def is_desktop(self) -> bool:
        return is_desktop(self.viewport_width)

    @property
    def chrome(self) -> SidePanel | BottomBar:
        if self.is_desktop:
            return project_side_panel(self.state)
        return project_bottom_bar(self.state)

    def resize(self, viewport_width: int) -> None:
        self.viewport_width = viewport_width

    def mount(self) -> Callable[[], None]:
        if self._teardown is None:
            self._teardown = self.navigation.setup_event_listener()
        return self.unmount

    def unmount(self) -> None:
        if self._teardown is not None:
            self._teardown()
            self._teardown = None

    def change_screen(self, screen: str) -> None:
        if screen in ROOT_SCREENS:
            self.navigation.navigator.push(ROOT_ROUTE)
            return
        self.state.active_screen = screen

    def open_event(self, event_id: str) -> None:
        self.navigation.navigate_to_event(event_id)

    def to_dict(self) -> dict:
        chrome = self.chrome
        out = {
            "chrome": chrome.kind,
            "viewport_width": self.viewport_width,
            "active_screen": self.state.active_screen,
            "items": [{"id": i.id, "label": i.label, "active": i.active} for i in chrome.items],
        }
        if isinstance(chrome, SidePanel):
            out["profile_active"] = chrome.profile_active
            out["selected_event"] = chrome.selected_event
        return out
