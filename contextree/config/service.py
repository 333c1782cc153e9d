# contextree/config/service.py
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import fastjsonschema

from .providers import DefaultsProvider, FileProvider, OverrideProvider
from .schema import CONFIG_SCHEMA, DEFAULT_CONFIG
from .store import ConfigStore
from .types import ConfigProvider

CONFIG_PATH_ENV: Final[str] = "CONTEXTREE_CONFIG"



@dataclass
class ConfigService:
    globalStore: ConfigStore

    @classmethod
    def _build(cls, providers: list[ConfigProvider]) -> "ConfigService":
        providers.append(OverrideProvider())
        globalStore = ConfigStore(
            namespace="config:global",
            validator=fastjsonschema.compile(CONFIG_SCHEMA),
            providers=providers,
        )
        globalStore.validate()
        return cls(globalStore=globalStore)

    @classmethod
    def bootstrap(cls, *, path: str | Path | None = None, defaults: dict[str, Any] | None = None) -> "ConfigService":
        """
        Builds the global store: shipped defaults, then the optional user file
        (`path`, or the CONTEXTREE_CONFIG environment variable), then the
        in-memory runtime overrides.

        Raises fastjsonschema.JsonSchemaException when the user file doesn't
        match the config schema.
        """
        providers: list[ConfigProvider] = [DefaultsProvider(defaults if defaults is not None else DEFAULT_CONFIG)]
        filePath = path if path is not None else os.environ.get(CONFIG_PATH_ENV)
        if filePath:
            providers.append(FileProvider(filePath))
        return cls._build(providers)

    @classmethod
    def defaultsOnly(cls) -> "ConfigService":
        """Shipped defaults plus runtime overrides, no user file."""
        return cls._build([DefaultsProvider(DEFAULT_CONFIG)])
