# contextree/config/schema.py
from __future__ import annotations
from typing import Any

__all__ = ["DEFAULT_CONFIG", "CONFIG_SCHEMA"]



DEFAULT_CONFIG: dict[str, Any] = {
    "debug": {
        "devModeEnabled": False,
        # Log every request/execute/post resolution at DEBUG
        "traceBindings": False,
        "suppressRecurringMessages": {
            "enabled": False,
            "windowSeconds": 60,
            "maxPerWindow": 5,
            "summaryLevel": "INFO",
        },
    },
    "logging": {
        # Empty string disables the JSON file log
        "filePath": "",
    },
    "errors": {
        # Abort the process on invariant violations instead of raising
        "abortOnScram": False,
    },
}



CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": "contextree://config/global",
    "type": "object",
    "properties": {
        "debug": {
            "type": "object",
            "properties": {
                "devModeEnabled": {"type": "boolean"},
                "traceBindings": {"type": "boolean"},
                "suppressRecurringMessages": {
                    "type": "object",
                    "properties": {
                        "enabled": {"type": "boolean"},
                        "windowSeconds": {"type": "integer", "minimum": 1},
                        "maxPerWindow": {"type": "integer", "minimum": 1},
                        "summaryLevel": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
                    },
                    "additionalProperties": False,
                },
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "filePath": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "errors": {
            "type": "object",
            "properties": {
                "abortOnScram": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}
