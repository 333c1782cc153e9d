# contextree/app/globals.py
from __future__ import annotations
import logging
from typing import Any, cast, TYPE_CHECKING

import fastjsonschema

from contextree.app.context import PROCESS_REGISTRY

if TYPE_CHECKING:
    from contextree.bindings.names import NameLedger
    from contextree.config.service import ConfigService
    from contextree.scope.global_context import GlobalContext

logger = logging.getLogger(__name__)

__all__ = [
    "getGlobalContext",
    "installGlobalContext",
    "getNameLedger",
    "getConfigService",
    "installConfigService",
    "config",
    "configBool",
]



def getGlobalContext() -> GlobalContext:
    """
    The root scope of the process. Created on first use; names declared as
    module constants trigger this at import time.
    """
    root = PROCESS_REGISTRY.get("context.global")
    if root is None:
        from contextree.scope.global_context import GlobalContext
        root = GlobalContext("global")
        PROCESS_REGISTRY.register("context.global", root)
    return cast("GlobalContext", root)



def installGlobalContext(root: GlobalContext) -> GlobalContext | None:
    """Replaces the process root (and with it the name ledger). Returns the previous one."""
    previous = PROCESS_REGISTRY.get("context.global")
    PROCESS_REGISTRY.register("context.global", root, overwrite=True)
    return cast("GlobalContext | None", previous)



def getNameLedger() -> NameLedger:
    return getGlobalContext().ledger



def getConfigService() -> ConfigService:
    """
    The process config service, bootstrapped on first use. A user file that
    can't be loaded is logged once and replaced by the shipped defaults, so
    binding resolution never fails on configuration.
    """
    cfg = PROCESS_REGISTRY.get("config.service")
    if cfg is None:
        from contextree.config.service import ConfigService
        try:
            cfg = ConfigService.bootstrap()
        except (fastjsonschema.JsonSchemaException, TypeError, OSError):
            logger.exception("Config file could not be loaded; using shipped defaults")
            cfg = ConfigService.defaultsOnly()
        PROCESS_REGISTRY.register("config.service", cfg)
    return cast("ConfigService", cfg)



def installConfigService(service: ConfigService | None) -> ConfigService | None:
    """Replaces the config service; None drops it so the next read bootstraps defaults again."""
    previous = PROCESS_REGISTRY.unregister("config.service")
    if service is not None:
        PROCESS_REGISTRY.register("config.service", service)
    return cast("ConfigService | None", previous)



def config(path: str, default: Any = None) -> Any:
    """
    Read a dotted path from the merged global configuration.
    Returns `default` when the path is not found.

    Example:
      value = config("debug.suppressRecurringMessages.windowSeconds") # returns 60
      value = config("non.existing.path", 300)                        # returns 300
    """
    val = getConfigService().globalStore.get(path)
    return default if val is None else val



def configBool(path: str, default: bool = False) -> bool:
    """
    Read a boolean from the merged global configuration.
    """
    val = config(path, None)
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return bool(val)
