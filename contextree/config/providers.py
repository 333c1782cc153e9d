# contextree/config/providers.py
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5

from contextree.core.dictpath import getByPath, setByPath, deleteByPath
from .types import ConfigProvider

logger = logging.getLogger(__name__)

__all__ = ["OverrideProvider", "DefaultsProvider", "FileProvider"]



class OverrideProvider(ConfigProvider):
    """The only writable layer. Lives in memory, sits on top, and is never persisted."""
    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def set(self, key: str, value: Any) -> None:
        """Writes `value` at `key`; None removes the key (and parents it leaves empty)."""
        if value is None:
            deleteByPath(self._data, key, pruneEmptyParents=True)
            return
        setByPath(self._data, key, copy.deepcopy(value), createIfMissing=True)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)



class _FrozenLayer(ConfigProvider):
    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(data))

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def to_dict(self) -> dict[str, Any]:
        # Callers get a copy; the layer itself never changes after load
        return copy.deepcopy(self._data)



class DefaultsProvider(_FrozenLayer):
    """Shipped defaults (`DEFAULT_CONFIG`), at the bottom of the stack."""
    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__}: 'data' must be a Mapping, not '{type(data).__name__}'")
        super().__init__(data)



class FileProvider(_FrozenLayer):
    """
    User settings from a .json or .json5 file, read once at bootstrap.

        • Missing file → empty layer
        • Parse error → warning, empty layer
        • Non-object document → TypeError
    """
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> Mapping[str, Any]:
        if not self.path.exists():
            logger.debug("Config file '%s' not found; using defaults", self.path)
            return {}
        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")
        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as err:
            logger.warning("Config file '%s' could not be parsed, ignoring it: %s", self.path, err)
            return {}
        if parsed is None:
            return {}
        if not isinstance(parsed, Mapping):
            raise TypeError(f"{type(self).__name__}: '{self.path}' must hold an object, not '{type(parsed).__name__}'")
        return parsed
