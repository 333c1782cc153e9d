# contextree/config/store.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Callable

from .providers import OverrideProvider
from .types import ConfigProvider

logger = logging.getLogger(__name__)

__all__ = ["ConfigStore", "deepMerge"]



def deepMerge(left: Mapping[str, Any], right: Mapping[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; right wins on scalars and lists."""
    out: dict[str, Any] = dict(left)
    for key, rightValue in right.items():
        leftValue = out.get(key)
        if isinstance(leftValue, Mapping) and isinstance(rightValue, Mapping):
            out[key] = deepMerge(leftValue, rightValue)
        else:
            out[key] = rightValue
    return out



class ConfigStore:
    """
    Read-only layers (defaults, then the user file) under one writable
    runtime layer.

      - get: topmost layer holding the path wins
      - set: writes the runtime layer; the merged document must still match
        the schema, otherwise the write is undone and the error re-raised
    """
    def __init__(self, *, namespace: str, validator: Callable[[Any], Any] | None, providers: list[ConfigProvider]):
        if not providers or not isinstance(providers[-1], OverrideProvider):
            raise ValueError(f"{namespace}: the topmost provider must be an OverrideProvider")
        self.namespace = namespace
        self._validator = validator
        self._providers = providers
        self._runtime: OverrideProvider = providers[-1]

    def merged(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for provider in self._providers:
            merged = deepMerge(merged, provider.to_dict())
        return merged

    def validate(self) -> None:
        if self._validator is not None:
            self._validator(self.merged())

    def get(self, key: str) -> Any | None:
        for provider in reversed(self._providers):
            value = provider.get(key)
            if value is not None:
                return value
        return None

    def set(self, key: str, value: Any) -> None:
        """Sets a runtime override; None drops it so lower layers show through again."""
        previous = self._runtime.get(key)
        self._runtime.set(key, value)
        try:
            self.validate()
        except Exception:
            self._runtime.set(key, previous)
            logger.warning("Rejected %s value %r for '%s'", self.namespace, value, key)
            raise
        logger.debug("%s: '%s' set to %r", self.namespace, key, value)
