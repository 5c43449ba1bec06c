# canvas_map/events.py

"""
================================================================================
PRIORITY EVENT BUS
================================================================================
This module provides the events raised by a Viewport and the bus that routes
them to listeners. Every state-changing viewport operation builds one of these
events, dispatches it, and only commits the change if no listener canceled it.

Data Contract:
---------------
- Event variants: MoveEvent, ResizeEvent, ZoomEvent, SmoothEvent (cancelable)
  and PointerEvent (informational). Each carries its EventKind, the viewport
  that raised it, and its candidate payload.
- Public Methods:
    - EventBus.register(kind, listener, priority): adds a listener.
    - EventBus.dispatch(event): calls the listeners and returns the event.
    - EventBus.listeners(kind): the listeners in dispatch order.
- Side Effects: None beyond what listeners do.
- Invariants: Dispatch order is ascending priority; listeners of equal
  priority run in registration order. Listeners registered on EventKind.ANY
  run before the kind-specific listeners. A cancel never stops later
  listeners from running.
================================================================================
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Tuple

if TYPE_CHECKING:
    from .vector import Vector2
    from .viewport import Viewport


class Priority(IntEnum):
    LOW = 0
    NORMAL = 1
    HIGH = 2
    MONITOR = 3


class EventKind(Enum):
    ANY = "any"
    MOVE = "move"
    RESIZE = "resize"
    ZOOM = "zoom"
    SMOOTH = "smooth"
    POINTER = "pointer"


@dataclass(eq=False, frozen=True)
class ViewportEvent:
    """
    Base of all events; carries the viewport that raised it.

    Events are frozen records. The only state a listener may change is the
    canceled flag, through cancel().
    """
    kind: ClassVar[EventKind] = EventKind.ANY
    cancelable: ClassVar[bool] = False

    viewport: "Viewport"


@dataclass(eq=False, frozen=True)
class CancelableEvent(ViewportEvent):
    cancelable: ClassVar[bool] = True

    canceled: bool = field(default=False, init=False)

    def cancel(self):
        object.__setattr__(self, "canceled", True)

    def is_canceled(self) -> bool:
        return self.canceled


@dataclass(eq=False, frozen=True)
class MoveEvent(CancelableEvent):
    kind: ClassVar[EventKind] = EventKind.MOVE
    position: "Vector2" = None


@dataclass(eq=False, frozen=True)
class ResizeEvent(CancelableEvent):
    kind: ClassVar[EventKind] = EventKind.RESIZE
    size: "Vector2" = None


@dataclass(eq=False, frozen=True)
class ZoomEvent(CancelableEvent):
    kind: ClassVar[EventKind] = EventKind.ZOOM
    magnification: int = 0


@dataclass(eq=False, frozen=True)
class SmoothEvent(CancelableEvent):
    kind: ClassVar[EventKind] = EventKind.SMOOTH
    smooth: bool = False


@dataclass(eq=False, frozen=True)
class PointerEvent(ViewportEvent):
    kind: ClassVar[EventKind] = EventKind.POINTER
    position: "Vector2" = None


Listener = Callable[[Any], None]


class EventBus:
    """Routes events to listeners ordered by priority."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        # kind -> [(priority, listener), ...] kept sorted by priority
        self._listeners: Dict[EventKind, List[Tuple[Priority, Listener]]] = {}

    def register(self, kind: EventKind, listener: Listener, priority: Priority = Priority.NORMAL):
        """
        Adds a listener for one event kind.

        The listener is placed right before the first existing listener with a
        strictly greater priority, or appended when there is none.
        """
        entries = self._listeners.setdefault(kind, [])
        for index, (existing, _) in enumerate(entries):
            if existing > priority:
                entries.insert(index, (priority, listener))
                break
        else:
            entries.append((priority, listener))
        self.logger.debug(f"Registered {kind.value} listener at priority {Priority(priority).name}.")

    def listeners(self, kind: EventKind) -> Tuple[Listener, ...]:
        return tuple(listener for _, listener in self._listeners.get(kind, ()))

    def dispatch(self, event: ViewportEvent) -> ViewportEvent:
        """Calls every listener for the event's kind, in order, and returns the event."""
        for _, listener in self._listeners.get(EventKind.ANY, ()):
            listener(event)
        if event.kind is not EventKind.ANY:
            for _, listener in self._listeners.get(event.kind, ()):
                listener(event)
        return event
