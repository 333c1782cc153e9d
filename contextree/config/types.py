# contextree/config/types.py
from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

__all__ = ["ConfigProvider"]



class ConfigProvider(ABC):
    """One layer of a ConfigStore. Paths are dotted ("debug.traceBindings")."""

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def to_dict(self) -> Mapping[str, Any]: ...
