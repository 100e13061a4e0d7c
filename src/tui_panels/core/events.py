"""Ordered event emitter with propagation control and scoped suppression.

Every stateful object in the panel tree is an ``EventEmitter``. Listeners run
in ascending ``level`` order; equal levels keep registration order, except
that ``pre()`` registrations go in front of their level.

Example:
    >>> box = EventEmitter()
    >>> _ = box.on("change", lambda event: print(event.type))
    >>> _ = box.emit("change")
    change

Suppression captures emits instead of delivering them:

    >>> suppress(lambda: box.emit("change"), box)
    [['change']]
"""

from __future__ import annotations

import bisect
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterator, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_LISTENERS = 10


class _Wildcard:
    """Suppression target that matches every emitter."""

    def __repr__(self) -> str:
        return "ANY"


ANY = _Wildcard()

# Each frame is a tuple of (target, captured keys) pairs. The stack itself is
# an immutable tuple so a copied context never shares frames with its parent.
_suppression: ContextVar[tuple[tuple[tuple[Any, list], ...], ...]] = ContextVar(
    "tui_panels_suppression", default=()
)


def _captured_by(emitter: Any) -> Optional[list]:
    """Return the capture list for ``emitter`` in the innermost matching scope."""
    for frame in reversed(_suppression.get()):
        for target, captured in frame:
            if target is emitter or target is ANY:
                return captured
    return None


def is_suppressed(emitter: Any) -> bool:
    """True when emits on ``emitter`` are currently being captured."""
    return _captured_by(emitter) is not None


@contextmanager
def suppressing(*targets: Any) -> Iterator[list[list[Hashable]]]:
    """Capture emits on ``targets`` (every emitter if none) for the block.

    Yields one list per target; each collects the keys that were emitted on
    that target while the block ran.
    """
    if not targets:
        targets = (ANY,)
    captures: list[list[Hashable]] = [[] for _ in targets]
    token = _suppression.set(_suppression.get() + (tuple(zip(targets, captures)),))
    try:
        yield captures
    finally:
        _suppression.reset(token)


def suppress(callback: Callable[[], Any], *targets: Any) -> list[list[Hashable]]:
    """Run ``callback`` with ``targets`` suppressed and return what was captured."""
    with suppressing(*targets) as captures:
        callback()
    return captures


@dataclass(eq=False)
class Listener:
    """A registered callback."""
    callback: Callable[..., Any]
    level: int = 0
    once: bool = False


class Event:
    """Dispatch context handed to each listener as its first argument."""

    __slots__ = ("emitter", "type", "args", "default_allowed", "_listener", "_propagation")

    def __init__(self, emitter: EventEmitter, type: Hashable, args: tuple, listener: Listener) -> None:
        self.emitter = emitter
        self.type = type
        self.args = args
        self.default_allowed = True
        self._listener = listener
        self._propagation = True

    def stop_propagation(self) -> None:
        """Skip the listeners after this one for the current dispatch."""
        self._propagation = False

    def prevent_default(self) -> None:
        """Tell the emitter not to run its built-in action for this event."""
        self.default_allowed = False

    def remove(self) -> None:
        """Unsubscribe the running listener."""
        self.emitter._remove_entry(self.type, self._listener)

    @property
    def propagation_stopped(self) -> bool:
        return not self._propagation


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a dispatch. Truthy when at least one listener ran."""
    delivered: bool
    default_allowed: bool = True

    def __bool__(self) -> bool:
        return self.delivered

    @property
    def default_prevented(self) -> bool:
        return not self.default_allowed


NOT_DELIVERED = DispatchResult(False, True)


class EventEmitter:
    """Typed-by-key publish/subscribe primitive."""

    max_listeners: int = DEFAULT_MAX_LISTENERS

    def __init__(self) -> None:
        self._events: dict[Hashable, list[Listener]] = {}
        self._leak_warned: set[Hashable] = set()

    def subscribe(
        self,
        key: Hashable,
        callback: Callable[..., Any],
        *,
        once: bool = False,
        prepend: bool = False,
        level: int = 0,
    ) -> EventEmitter:
        """Register ``callback`` for ``key``.

        Args:
            key: Event key
            callback: Called as ``callback(event, *args)``
            once: Remove the entry after its first invocation
            prepend: Insert before existing entries of the same level
            level: Ordering level, lower runs first
        """
        if not callable(callback):
            raise TypeError(f"Listener must be callable, got {type(callback).__name__}")

        entries = self._events.setdefault(key, [])

        if self.max_listeners and len(entries) >= self.max_listeners and key not in self._leak_warned:
            self._leak_warned.add(key)
            logger.warning(
                "Possible listener leak: %d %r listeners added to %s. "
                "Raise max_listeners to silence this warning",
                len(entries) + 1, key, type(self).__name__,
            )

        levels = [entry.level for entry in entries]
        if prepend:
            index = bisect.bisect_left(levels, level)
        else:
            index = bisect.bisect_right(levels, level)
        entries.insert(index, Listener(callback, level, once))
        return self

    def on(self, key: Hashable, callback: Callable[..., Any], *, level: int = 0) -> EventEmitter:
        return self.subscribe(key, callback, level=level)

    def once(self, key: Hashable, callback: Callable[..., Any], *, level: int = 0) -> EventEmitter:
        return self.subscribe(key, callback, once=True, level=level)

    def pre(self, key: Hashable, callback: Callable[..., Any], *, level: int = 0) -> EventEmitter:
        return self.subscribe(key, callback, prepend=True, level=level)

    def pre_once(self, key: Hashable, callback: Callable[..., Any], *, level: int = 0) -> EventEmitter:
        return self.subscribe(key, callback, once=True, prepend=True, level=level)

    def unsubscribe(self, key: Hashable, callback: Callable[..., Any]) -> EventEmitter:
        """Remove the most recently added entry for ``callback``. Unknown callbacks are ignored."""
        entries = self._events.get(key)
        if entries:
            for i in range(len(entries) - 1, -1, -1):
                if entries[i].callback == callback:
                    del entries[i]
                    break
            if not entries:
                del self._events[key]
        return self

    off = unsubscribe

    def unsubscribe_all(self, key: Optional[Hashable] = None) -> EventEmitter:
        """Remove every entry for ``key``, or for all keys when omitted."""
        if key is None:
            self._events = {}
        else:
            self._events.pop(key, None)
        return self

    def _remove_entry(self, key: Hashable, entry: Listener) -> None:
        entries = self._events.get(key)
        if not entries:
            return
        for i, existing in enumerate(entries):
            if existing is entry:
                del entries[i]
                break
        if not entries:
            del self._events[key]

    def dispatch(self, key: Hashable, *args: Any) -> DispatchResult:
        """Deliver ``key`` to its listeners.

        Returns a falsy result when the emit was suppressed or nobody listens.
        ``default_allowed`` is False if any invoked listener prevented the
        default action.
        """
        captured = _captured_by(self)
        if captured is not None:
            captured.append(key)
            return NOT_DELIVERED

        entries = self._events.get(key)
        if not entries:
            return NOT_DELIVERED

        default_allowed = True
        for entry in tuple(entries):
            if entry.once:
                self._remove_entry(key, entry)
            event = Event(self, key, args, entry)
            entry.callback(event, *args)
            default_allowed = default_allowed and event.default_allowed
            if event.propagation_stopped:
                break
        return DispatchResult(True, default_allowed)

    emit = dispatch

    def raw_listeners(self, key: Hashable) -> list[Listener]:
        return list(self._events.get(key, ()))

    def listeners(self, key: Hashable) -> list[Callable[..., Any]]:
        return [entry.callback for entry in self._events.get(key, ())]

    def listener_count(self, key: Hashable, callback: Optional[Callable[..., Any]] = None) -> int:
        entries = self._events.get(key, ())
        if callback is not None:
            return sum(1 for entry in entries if entry.callback == callback)
        return len(entries)

    def event_names(self) -> list[Hashable]:
        return list(self._events)

    def suppress(self, callback: Callable[[], Any], *targets: Any) -> list[list[Hashable]]:
        """Like the module-level ``suppress`` but targets this emitter by default."""
        return suppress(callback, *(targets or (self,)))

    def suppressed(self, *targets: Any):
        """Context-manager form of :meth:`suppress`."""
        return suppressing(*(targets or (self,)))
