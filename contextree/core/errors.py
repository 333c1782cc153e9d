# contextree/core/errors.py
from __future__ import annotations
import logging
import os
from typing import NoReturn

__all__ = [
    "ScopeScramError",
    "NameInUseError",
    "DuplicateBindingError",
    "ExpiredBindingError",
    "UnavailableBindingError",
    "MissingBindingError",
    "FlagAlreadySetError",
    "FlagNotSetError",
    "ExpiredObserverError",
    "scram",
]

logger = logging.getLogger(__name__)



class ScopeScramError(Exception):
    """
    Raised when a caller violates a core invariant of the scope tree and we
    hit the shutdown button. These are programmer errors: they are never
    caught and logged by the registry itself.
    """
    def __init__(self, message: str, *, scope: str | None = None, binding: str | None = None) -> None:
        super().__init__(message)
        self.scope = scope
        self.binding = binding
        self.logged = False



class NameInUseError(ScopeScramError):
    """A name of the same kind was already coined somewhere in the process."""



class DuplicateBindingError(ScopeScramError):
    """An unexpired binding with the same kind and name lives in the context-tree."""



class ExpiredBindingError(ScopeScramError):
    """The nearest binding for a name has expired."""



class UnavailableBindingError(ScopeScramError):
    """The nearest binding for a name is currently not requestable/executable."""



class MissingBindingError(ScopeScramError):
    """No binding for a name exists at or above the context."""



class FlagAlreadySetError(ScopeScramError):
    pass



class FlagNotSetError(ScopeScramError):
    pass



class ExpiredObserverError(Exception):
    """Signals the owning context that an observer expired and should be pruned."""



def scram(error: ScopeScramError) -> NoReturn:
    """
    Log `error` as critical and raise it.

    With `errors.abortOnScram` enabled the process is aborted instead.
    An error that was already logged (re-raised from a nested resolution)
    is not logged twice.
    """
    from contextree.app.globals import configBool

    if not error.logged:
        error.logged = True
        logger.critical("%s: %s (scope=%s)", type(error).__name__, error, error.scope)
    if configBool("errors.abortOnScram", False):
        logger.critical("errors.abortOnScram is set. Pressing AZ-5.")
        logging.shutdown()
        os.abort()
    raise error
