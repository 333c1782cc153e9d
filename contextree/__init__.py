# contextree/__init__.py
from __future__ import annotations

from contextree.app.globals import getGlobalContext, installGlobalContext, getNameLedger
from contextree.bindings.names import (
    BindingName,
    ExecutableName,
    FlagName,
    NameLedger,
    NotificationName,
    RequestableName,
)
from contextree.bindings.notification import Notification
from contextree.bindings.predicates import HostLifecycle
from contextree.core.errors import (
    DuplicateBindingError,
    ExpiredBindingError,
    FlagAlreadySetError,
    FlagNotSetError,
    MissingBindingError,
    NameInUseError,
    ScopeScramError,
    UnavailableBindingError,
)
from contextree.core.logging import configureLogging
from contextree.scope.context import Context
from contextree.scope.global_context import GlobalContext

__all__ = [
    "Context",
    "GlobalContext",
    "getGlobalContext",
    "installGlobalContext",
    "getNameLedger",
    "BindingName",
    "RequestableName",
    "ExecutableName",
    "NotificationName",
    "FlagName",
    "NameLedger",
    "Notification",
    "HostLifecycle",
    "ScopeScramError",
    "NameInUseError",
    "DuplicateBindingError",
    "ExpiredBindingError",
    "UnavailableBindingError",
    "MissingBindingError",
    "FlagAlreadySetError",
    "FlagNotSetError",
    "configureLogging",
]
