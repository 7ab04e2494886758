"""Lightweight signals and the scope that owns them.

Usage:
    added = Signal[Participant]()
    connection = added.connect(lambda p: print("joined", p))
    added.fire(alice)
    connection.disconnect()

    # Await the next firing from a coroutine
    members = await resolved.wait()

    # A Scope releases every signal it constructed in one call
    scope = Scope()
    changed = scope.construct(Signal)
    scope.destroy()  # changed has no handlers left
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
S = TypeVar("S", bound="Signal[Any]")

log = logging.getLogger(__name__)


class Connection:
    """Handle returned by Signal.connect. Disconnecting is idempotent."""

    __slots__ = ("_signal", "_handler", "connected")

    def __init__(self, signal: Signal[Any], handler: Callable[[Any], Any]) -> None:
        self._signal = signal
        self._handler = handler
        self.connected = True

    def disconnect(self) -> None:
        """Stop receiving firings."""
        if not self.connected:
            return
        self.connected = False
        self._signal._remove(self)


class Signal(Generic[T]):
    """Synchronous publish/subscribe channel carrying one value per firing.

    Handlers run in connection order inside ``fire``. A handler that raises
    is logged and skipped; later handlers and the caller of ``fire`` continue.
    """

    def __init__(self) -> None:
        self._connections: list[Connection] = []
        self._waiters: list[asyncio.Future[T]] = []

    def connect(self, handler: Callable[[T], Any]) -> Connection:
        """Subscribe handler. Returns a Connection for unsubscribing."""
        connection = Connection(self, handler)
        self._connections.append(connection)
        return connection

    def once(self, handler: Callable[[T], Any]) -> Connection:
        """Subscribe handler for the next firing only."""

        def _wrapper(value: T) -> None:
            connection.disconnect()
            handler(value)

        connection = self.connect(_wrapper)
        return connection

    def fire(self, value: T) -> None:
        """Deliver value to every connected handler and pending waiter."""
        for connection in list(self._connections):
            if connection.connected:
                try:
                    connection._handler(value)
                except Exception:
                    log.exception("Signal handler %r failed", connection._handler)

        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(value)

    async def wait(self) -> T:
        """Suspend until the next firing and return its value."""
        waiter: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        return await waiter

    def disconnect_all(self) -> None:
        """Drop every handler and cancel pending waiters."""
        for connection in list(self._connections):
            connection.disconnect()
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            waiter.cancel()

    @property
    def handler_count(self) -> int:
        """Number of connected handlers."""
        return len(self._connections)

    def _remove(self, connection: Connection) -> None:
        try:
            self._connections.remove(connection)
        except ValueError:
            pass


class Scope:
    """Owns resources and releases all of them together.

    Resources are signals built with ``construct``, connections added with
    ``add`` and plain cleanup callables. ``destroy`` releases them in reverse
    order of registration and is safe to call more than once.
    """

    def __init__(self) -> None:
        self._cleanups: list[Callable[[], Any]] = []
        self._destroyed = False

    def construct(self, factory: Callable[[], S]) -> S:
        """Create a signal owned by this scope."""
        signal = factory()
        self._cleanups.append(signal.disconnect_all)
        return signal

    def add(self, resource: Connection | Callable[[], Any]) -> None:
        """Register a connection or cleanup callable."""
        if isinstance(resource, Connection):
            self._cleanups.append(resource.disconnect)
        else:
            self._cleanups.append(resource)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Release every owned resource."""
        if self._destroyed:
            return
        self._destroyed = True
        cleanups, self._cleanups = self._cleanups, []
        for cleanup in reversed(cleanups):
            cleanup()
