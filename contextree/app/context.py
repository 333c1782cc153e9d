# contextree/app/context.py
from __future__ import annotations

from typing import Any



class _ProcessContext:
    """
    Process-wide service slots (global scope, config service).
    Slots are looked up by name so tests can swap a service in and out.
    """
    def __init__(self) -> None:
        self._services: dict[str, Any] = {}

    def register(self, name: str, service: Any, *, overwrite: bool = False) -> None:
        if not overwrite and name in self._services:
            raise ValueError(f"Service '{name}' already registered")
        self._services[name] = service

    def unregister(self, name: str) -> Any | None:
        return self._services.pop(name, None)

    def get(self, name: str) -> Any | None:
        return self._services.get(name)

# Single instance
PROCESS_REGISTRY = _ProcessContext()
