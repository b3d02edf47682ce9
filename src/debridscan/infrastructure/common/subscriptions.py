"""Listener registry with release-able subscription handles."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by :meth:`ListenerRegistry.add`."""

    __slots__ = ("_registry", "_listener", "_active")

    def __init__(self, registry: ListenerRegistry[Any], listener: Callable[[Any], None]) -> None:
        self._registry = registry
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._registry._remove(self._listener)


class ListenerRegistry(Generic[T]):
    """Fan a value out to subscribed listeners.

    A failing listener is logged and does not prevent delivery to the
    others.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._listeners: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, listener: Callable[[T], None]) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: Callable[[T], None]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def notify(self, value: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                log.error("listener_failed", registry=self._name, exc_info=True)
