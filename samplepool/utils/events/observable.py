"""Module: observable.py.

Author: Michael Economou
Date: 2026-03-02

Observable - Pure Python Observer pattern implementation.

The pane models and the transfer queue controller publish their changes
through Signal descriptors so that the core never imports Qt. The Qt
layer connects plain callables to these signals.

Callbacks run synchronously on the emitting thread, in connection order.
A failing callback is logged and does not stop the remaining ones.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from samplepool.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

__all__ = ["Observable", "Signal", "SignalInstance"]


class Signal:
    """Descriptor for defining observable signals.

    Usage:
        class TransferQueueController(Observable):
            transfer_added = Signal(object)
            batch_finished = Signal()

        controller.transfer_added.connect(callback)
        controller.transfer_added.emit(item)
    """

    def __init__(self, *arg_types: type):
        self.arg_types = arg_types
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Observable | None, _objtype: type | None = None) -> SignalInstance:
        if obj is None:
            return self  # type: ignore[return-value]

        attr_name = f"_signal_{self.name}"
        instance = obj.__dict__.get(attr_name)
        if instance is None:
            instance = SignalInstance(self.name, self.arg_types)
            obj.__dict__[attr_name] = instance
        return instance


class SignalInstance:
    """Per-object signal holding the connected callbacks."""

    def __init__(self, name: str, arg_types: tuple[type, ...]):
        self.name = name
        self.arg_types = arg_types
        self._callbacks: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, callback: Callable[..., Any]) -> None:
        """Connect callback to signal (connecting twice is a no-op)."""
        with self._lock:
            if callback in self._callbacks:
                return
            self._callbacks.append(callback)

        logger.debug(
            "Signal connected: %s -> %s",
            self.name,
            getattr(callback, "__name__", repr(callback)),
            extra={"dev_only": True},
        )

    def disconnect(self, callback: Callable[..., Any] | None = None) -> None:
        """Disconnect one callback, or every callback when None."""
        with self._lock:
            if callback is None:
                self._callbacks.clear()
            elif callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def receiver_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self, *args: Any) -> None:
        """Emit signal with arguments."""
        with self._lock:
            callbacks = self._callbacks.copy()

        # Called outside the lock: callbacks may connect or emit themselves
        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                logger.exception(
                    "Error in signal callback: %s -> %s",
                    self.name,
                    getattr(callback, "__name__", repr(callback)),
                )


class Observable:
    """Base class for objects exposing Signal descriptors."""

    def __init__(self) -> None:
        super().__init__()
