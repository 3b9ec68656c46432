from __future__ import annotations

from typing import Callable, Dict

from modules.helpers.logging_helper import log_debug, log_module_import

log_module_import(__name__)

MINIMIZE_CHANNEL = "minimize-window"
CLOSE_CHANNEL = "close-window"


class WindowHostError(RuntimeError):
    """Raised when a control message has no registered handler."""


class WindowHost:
    """One-way control channel between the timer and the window that hosts it.

    Messages carry no payload and are never acknowledged. The window
    registers a handler per channel; the timer only ever sends.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Callable[[], None]] = {}

    def on(self, channel: str, handler: Callable[[], None]) -> None:
        self._handlers[channel] = handler

    def off(self, channel: str) -> None:
        self._handlers.pop(channel, None)

    def send(self, channel: str) -> None:
        handler = self._handlers.get(channel)
        if handler is None:
            raise WindowHostError(f"No handler registered for '{channel}'")
        log_debug(f"Dispatching {channel}", func_name="WindowHost.send")
        handler()

    def request_minimize(self) -> None:
        self.send(MINIMIZE_CHANNEL)

    def request_close(self) -> None:
        self.send(CLOSE_CHANNEL)
