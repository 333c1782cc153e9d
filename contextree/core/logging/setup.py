# contextree/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from contextree.app.globals import config, configBool
from .formatters import DevFormatter, JsonFormatter
from .filters import RecurringSuppressFilter

__all__ = [
    "ROOT_LOGGER_NAME",
    "configureLogging",
]



ROOT_LOGGER_NAME = "contextree"



def configureLogging(*, handler: logging.Handler | None = None) -> logging.Logger:
    """
    Configure the `contextree` logger hierarchy.

    Dev (`debug.devModeEnabled`):
      - Console pretty logs (DEBUG)
    Otherwise:
      - Console INFO

    Both modes:
      - JSON file log with rotation when `logging.filePath` is set
      - Optional recurring suppression (`debug.suppressRecurringMessages.*`)

    The library never touches the root logger; host applications keep full
    control over their own handlers. Pass `handler` to replace the console
    handler (tests use this to capture output).
    """
    devMode = configBool("debug.devModeEnabled", False)
    level = logging.DEBUG if devMode else logging.INFO

    lib = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(lib.handlers):
        lib.removeHandler(existing)
        existing.close()
    lib.setLevel(level)

    consoleHandler = handler or logging.StreamHandler()
    consoleHandler.setLevel(level)
    consoleHandler.setFormatter(DevFormatter())
    handlers: list[logging.Handler] = [consoleHandler]

    filePath = str(config("logging.filePath", "") or "").strip()
    if filePath:
        fileHandler = logging.handlers.RotatingFileHandler(
            filePath,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fileHandler.setLevel(level)
        fileHandler.setFormatter(JsonFormatter())
        handlers.append(fileHandler)

    # Optional recurring suppression (disabled by default)
    if configBool("debug.suppressRecurringMessages.enabled", False):
        # Resolve summaryLevel string like "INFO" → logging.INFO, fallback safe
        levelName = str(config("debug.suppressRecurringMessages.summaryLevel", "INFO")).upper()
        summaryLevel = getattr(logging, levelName, logging.INFO)

        suppressFilter = RecurringSuppressFilter(
            windowSeconds=int(config("debug.suppressRecurringMessages.windowSeconds", 60)),
            maxPerWindow=int(config("debug.suppressRecurringMessages.maxPerWindow", 5)),
            summaryLevel=summaryLevel,
        )
        for hdl in handlers:
            hdl.addFilter(suppressFilter)

    for hdl in handlers:
        lib.addHandler(hdl)
    lib.propagate = not devMode
    return lib
