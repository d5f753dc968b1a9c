"""Event navigation shared between the main page and profile pages.

A profile page that lists someone else's events does not show the event
itself; it hands the request to the main page (``/?event=<id>``) so the
navigation chrome stays mounted. Requests travel over an explicit
``NavigationChannel`` that the application owns and passes to whoever needs
it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

OPEN_EVENT = "openEvent"
ROOT_ROUTE = "/"


def _noop() -> None:
    return None


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


@dataclass
class RecordingNavigator:
    """Navigator that remembers the requested locations.

    Request handlers turn ``location`` into a redirect response.
    """

    history: list[str] = field(default_factory=list)

    def push(self, path: str) -> None:
        self.history.append(path)

    @property
    def location(self) -> str | None:
        return self.history[-1] if self.history else None


@dataclass(frozen=True)
class OpenEventIntent:
    event_id: str
    name: str = OPEN_EVENT


IntentListener = Callable[[OpenEventIntent], None]


class NavigationChannel:
    """In-process broadcast of navigation intents."""

    def __init__(self) -> None:
        self._listeners: list[IntentListener] = []

    def subscribe(self, listener: IntentListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, intent: OpenEventIntent) -> None:
        for listener in list(self._listeners):
            listener(intent)

    def open_event(self, event_id: str) -> None:
        self.publish(OpenEventIntent(event_id=event_id))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


def event_route(event_id: str) -> str:
    return f"{ROOT_ROUTE}?{urlencode({'event': event_id})}"


class EventNavigation:
    def __init__(self, navigator: Navigator, channel: NavigationChannel | None = None) -> None:
        self.navigator = navigator
        self.channel = channel

    def navigate_to_event(self, event_id: str) -> None:
        self.navigator.push(event_route(event_id))

    def setup_event_listener(self, callback: Callable[[], None] | None = None) -> Callable[[], None]:
        """Follow ``openEvent`` intents until the returned teardown is called."""
        if self.channel is None:
            return _noop

        def handle_open_event(intent: OpenEventIntent) -> None:
            if not intent.event_id:
                logger.debug("Ignoring %s intent without an event id", intent.name)
                return
            self.navigate_to_event(intent.event_id)
            if callback is not None:
                callback()

        return self.channel.subscribe(handle_open_event)
