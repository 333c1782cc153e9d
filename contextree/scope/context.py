# contextree/scope/context.py
from __future__ import annotations
import logging
import types
from collections.abc import Iterable
from typing import Annotated, Any, Callable, TypeVar, Union, cast, get_args, get_origin

from contextree.app.globals import configBool
from contextree.bindings.executable import Executable
from contextree.bindings.flag import Flag
from contextree.bindings.names import ExecutableName, FlagName, NotificationName, RequestableName
from contextree.bindings.notification import Notification
from contextree.bindings.observer import Observer
from contextree.bindings.predicates import HostLifecycle, Predicate, resolveExpiry
from contextree.bindings.requestable import Requestable
from contextree.core.errors import (
    DuplicateBindingError,
    ExpiredObserverError,
    FlagAlreadySetError,
    FlagNotSetError,
    MissingBindingError,
    ScopeScramError,
    scram,
)
from contextree.core.ids import uuidv7
from contextree.core.logging.context import logContext
from contextree.core.weak import WeakHandleSet

__all__ = ["Context"]

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound="Context")



def _runtimeCheckable(tp: Any) -> Any:
    """
    What `isinstance` can check for the asserted type: parameterized
    generics check their origin (`list[int]` as `list`), unions each member.
    Element types are not inspected.
    """
    origin = get_origin(tp)
    if origin is None:
        if isinstance(tp, type):
            return tp
    elif origin is Union or origin is types.UnionType:
        return tuple(_runtimeCheckable(arg) for arg in get_args(tp))
    elif origin is Annotated:
        return _runtimeCheckable(get_args(tp)[0])
    elif isinstance(origin, type):
        return origin
    raise TypeError(f"request() can't check a value against {tp!r}; pass a class or a generic alias")



def _typeName(tp: Any) -> str:
    return tp.__name__ if get_origin(tp) is None and isinstance(tp, type) else str(tp)



class Context:
    """
    A scope in the binding tree.

    A context holds its supercontext strongly and its subcontexts weakly: a
    subtree lives exactly as long as something outside the tree holds on to
    its contexts. When the last outside reference goes away the context is
    collected and drops out of its parent's subcontexts.

    Lookup rules per binding kind:
      - requestables/executables: self, then ancestors (nearest wins)
      - flags: set-conflicts across the whole context-tree, query/unset on self + ancestors
      - notifications: self, all descendants, all ancestors
    """
    def __init__(self, name: str = "", *, supercontext: Context | None = None) -> None:
        self.name = name
        self.id = uuidv7(prefix="ctx_")
        self._supercontext = supercontext
        self._subcontexts: WeakHandleSet[Context] = WeakHandleSet()
        self._requestables: dict[RequestableName, Requestable] = {}
        self._executables: dict[ExecutableName, Executable] = {}
        self._observers: dict[NotificationName, list[Observer]] = {}
        self._flags: set[Flag] = set()
        if supercontext is not None:
            supercontext._subcontexts.add(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path!r} id={self.id}>"

    # ----- Tree -----

    @property
    def supercontext(self) -> Context | None:
        return self._supercontext

    @property
    def subcontexts(self) -> list[Context]:
        """Live direct children, in creation order."""
        return list(self._subcontexts)

    @property
    def supercontextTree(self) -> list[Context]:
        """Ancestors, nearest first."""
        chain: list[Context] = []
        context = self._supercontext
        while context is not None:
            chain.append(context)
            context = context._supercontext
        return chain

    @property
    def subcontextTree(self) -> list[Context]:
        """All descendants, depth-first pre-order."""
        out: list[Context] = []
        for sub in self._subcontexts:
            out.append(sub)
            out.extend(sub.subcontextTree)
        return out

    @property
    def contextTree(self) -> list[Context]:
        return self.supercontextTree + [self] + self.subcontextTree

    @property
    def path(self) -> str:
        names = [context.name for context in reversed(self.supercontextTree)]
        names.append(self.name)
        return "/".join(names)

    def createSubcontext(self, name: str | None = None, *, ofType: type[C] | None = None) -> C:
        """
        Creates a child scope. With `ofType`, the child is an instance of that
        Context subclass and `name` defaults to the class name.
        """
        cls = ofType if ofType is not None else Context
        if not (isinstance(cls, type) and issubclass(cls, Context)):
            raise TypeError(f"ofType must be a Context subclass; got {cls!r}")
        if getattr(cls, "isRoot", False):
            raise TypeError(f"{cls.__name__} is a root scope and can't be a subcontext")
        if name is None:
            if ofType is None:
                raise TypeError("createSubcontext() needs a name or ofType")
            name = cls.__name__
        subcontext = cls(name, supercontext=self)
        logger.debug("Created subcontext '%s'", subcontext.path)
        return cast(C, subcontext)

    def release(self, subcontext: Context) -> bool:
        """Forgets `subcontext`. It keeps resolving upward, but is no longer reached from here."""
        return self._subcontexts.discard(subcontext)

    def detach(self) -> None:
        """Cuts this context (and its subtree) off from its supercontext."""
        if self._supercontext is not None:
            self._supercontext.release(self)
            logger.debug("Detached '%s'", self.path)
            self._supercontext = None

    def _traceEnabled(self) -> bool:
        return configBool("debug.traceBindings", False)

    # ----- Registration -----

    def _evictOrScram(
        self,
        name: RequestableName | ExecutableName,
        registryOf: Callable[[Context], dict[Any, Any]],
        kind: str,
    ) -> None:
        """
        Scram if an unexpired binding with `name` exists anywhere in the
        context-tree; otherwise evict every expired one.
        """
        holders = [context for context in self.contextTree if name in registryOf(context)]
        for context in holders:
            if not registryOf(context)[name].isExpired():
                scram(DuplicateBindingError(
                    f"An unexpired {kind} named {name} already exists in context: {context.name}",
                    scope=context.path,
                    binding=name.rawValue,
                ))
        for context in holders:
            del registryOf(context)[name]
            logger.debug("Evicted expired %s '%s' from '%s'", kind, name, context.path)

    def addRequestable(
        self,
        name: RequestableName,
        server: Callable[[], Any],
        *,
        isRequestable: Predicate | None = None,
        isExpired: Predicate | None = None,
        expiresWith: Any = None,
        ifActive: HostLifecycle | None = None,
        whileActive: HostLifecycle | None = None,
    ) -> None:
        """
        Adds a requestable serving `server()`.

        - isRequestable: whether requests are allowed right now (default: always)
        - isExpired: whether the requestable should be treated as removed
        - expiresWith: expire once this object is garbage collected
        - ifActive: requestable while the host is active, expires with the host
        - whileActive: requestable while the host is active, expires once it isn't

        Precondition: no unexpired requestable named `name` exists in the
        context-tree.
        """
        if not isinstance(name, RequestableName):
            raise TypeError(f"name must be a RequestableName; got {type(name).__name__}")
        if not callable(server):
            raise TypeError("server must be callable")
        available, expired = resolveExpiry(
            isRequestable, isExpired=isExpired, expiresWith=expiresWith, ifActive=ifActive, whileActive=whileActive,
        )
        self._evictOrScram(name, lambda context: context._requestables, "requestable")
        self._requestables[name] = Requestable(name=name, server=server, isRequestable=available, isExpired=expired)
        logger.debug("Added requestable '%s' to '%s'", name, self.path)

    def addExecutable(
        self,
        name: ExecutableName,
        action: Callable[[], None],
        *,
        isExecutable: Predicate | None = None,
        isExpired: Predicate | None = None,
        expiresWith: Any = None,
        ifActive: HostLifecycle | None = None,
        whileActive: HostLifecycle | None = None,
    ) -> None:
        """Adds an executable running `action()`. Same options and precondition as addRequestable."""
        if not isinstance(name, ExecutableName):
            raise TypeError(f"name must be an ExecutableName; got {type(name).__name__}")
        if not callable(action):
            raise TypeError("action must be callable")
        available, expired = resolveExpiry(
            isExecutable, isExpired=isExpired, expiresWith=expiresWith, ifActive=ifActive, whileActive=whileActive,
        )
        self._evictOrScram(name, lambda context: context._executables, "executable")
        self._executables[name] = Executable(name=name, action=action, isExecutable=available, isExpired=expired)
        logger.debug("Added executable '%s' to '%s'", name, self.path)

    def addObserver(
        self,
        names: NotificationName | Iterable[NotificationName],
        deliver: Callable[[Notification], None],
        *,
        isObserving: Predicate | None = None,
        isExpired: Predicate | None = None,
        expiresWith: Any = None,
        ifActive: HostLifecycle | None = None,
        whileActive: HostLifecycle | None = None,
    ) -> None:
        """
        Calls `deliver(notification)` for every notification named in `names`
        posted anywhere in this context-tree. Observers of the same name are
        notified in the order they were added.
        """
        nameList = [names] if isinstance(names, NotificationName) else list(names)
        for name in nameList:
            if not isinstance(name, NotificationName):
                raise TypeError(f"names must be NotificationName(s); got {type(name).__name__}")
        if not callable(deliver):
            raise TypeError("deliver must be callable")
        observing, expired = resolveExpiry(
            isObserving, isExpired=isExpired, expiresWith=expiresWith, ifActive=ifActive, whileActive=whileActive,
        )
        for name in nameList:
            observer = Observer(notificationName=name, deliver=deliver, isObserving=observing, isExpired=expired)
            self._observers.setdefault(name, []).append(observer)
            logger.debug("Added observer for '%s' to '%s'", name, self.path)

    def hasRequestable(self, name: RequestableName) -> bool:
        """Whether this context itself (not an ancestor) holds a requestable named `name`."""
        return name in self._requestables

    def hasExecutable(self, name: ExecutableName) -> bool:
        return name in self._executables

    def observerCount(self, name: NotificationName) -> int:
        return len(self._observers.get(name, ()))

    # ----- Resolution -----

    def request(self, name: RequestableName, tp: type[T] | None = None) -> T:
        """
        Returns the value served by the nearest requestable named `name`, at or
        above this context. With `tp`, the value must be an instance of it.

        The nearest requestable decides: when it's expired or not requestable,
        this scrams instead of falling back to a farther one. When its server
        raises, the error is logged and None is returned.
        """
        context: Context | None = self
        while context is not None:
            requestable = context._requestables.get(name)
            if requestable is not None:
                with logContext(scope=context.path, binding=name.rawValue):
                    try:
                        value = requestable.request()
                    except ScopeScramError as err:
                        if err.scope is None:
                            err.scope = context.path
                        scram(err)
                    except Exception:
                        logger.exception("Requestable '%s' failed to serve a value", name)
                        return cast(T, None)
                if tp is not None and not isinstance(value, _runtimeCheckable(tp)):
                    raise TypeError(
                        f"Requestable '{name}' served {type(value).__name__}, expected {_typeName(tp)}"
                    )
                if self._traceEnabled():
                    logger.debug("Request '%s' from '%s' served by '%s'", name, self.path, context.path)
                return cast(T, value)
            context = context._supercontext

        scram(MissingBindingError(
            f"A requestable named {name} has not been added",
            scope=self.path,
            binding=name.rawValue,
        ))

    def execute(self, name: ExecutableName) -> bool:
        """
        Runs the nearest executable named `name`, at or above this context.
        Returns True once it ran, False if its action raised (logged).
        """
        context: Context | None = self
        while context is not None:
            executable = context._executables.get(name)
            if executable is not None:
                with logContext(scope=context.path, binding=name.rawValue):
                    try:
                        executable.execute()
                    except ScopeScramError as err:
                        if err.scope is None:
                            err.scope = context.path
                        scram(err)
                    except Exception:
                        logger.exception("Executable '%s' failed", name)
                        return False
                if self._traceEnabled():
                    logger.debug("Execute '%s' from '%s' ran in '%s'", name, self.path, context.path)
                return True
            context = context._supercontext

        scram(MissingBindingError(
            f"An executable named {name} has not been added",
            scope=self.path,
            binding=name.rawValue,
        ))

    # ----- Flags -----

    def setFlag(self, name: FlagName) -> None:
        flag = Flag(name)
        for context in self.contextTree:
            if flag in context._flags:
                scram(FlagAlreadySetError(
                    f"{name} flag is already set in {context.name}",
                    scope=context.path,
                    binding=name.rawValue,
                ))
        self._flags.add(flag)

    def unsetFlag(self, name: FlagName) -> None:
        """Unsets the flag in the nearest of self and its ancestors that has it set."""
        flag = Flag(name)
        context: Context | None = self
        while context is not None:
            if flag in context._flags:
                context._flags.discard(flag)
                return
            context = context._supercontext
        scram(FlagNotSetError(f"{name} flag was not set", scope=self.path, binding=name.rawValue))

    def flagIsSet(self, name: FlagName) -> bool:
        flag = Flag(name)
        return any(flag in context._flags for context in [self] + self.supercontextTree)

    # ----- Notifications -----

    def post(self, name: NotificationName, payload: Any = None) -> None:
        """
        Posts a notification to every observer of `name` in this context, then
        in every descendant (depth-first), then in every ancestor up to the
        root. Siblings are only reached through observers on a shared ancestor.
        """
        notification = Notification.make(name, self, payload)
        delivered = 0
        with logContext(scope=self.path, binding=name.rawValue):
            delivered += self._deliver(notification)
            for context in self.subcontextTree:
                delivered += context._deliver(notification)
            for context in self.supercontextTree:
                delivered += context._deliver(notification)
        if self._traceEnabled():
            logger.debug("Posted '%s' from '%s' to %d observer(s)", name, self.path, delivered)

    def _deliver(self, notification: Notification) -> int:
        observers = self._observers.get(notification.name)
        if not observers:
            return 0
        delivered = 0
        for observer in list(observers):
            try:
                if observer.notify(notification):
                    delivered += 1
            except ExpiredObserverError:
                self._removeObserver(observer)
            except ScopeScramError:
                raise
            except Exception:
                logger.exception("Observer for '%s' in '%s' failed", notification.name, self.path)
        return delivered

    def _removeObserver(self, observer: Observer) -> None:
        observers = self._observers.get(observer.notificationName)
        if observers is None:
            return
        try:
            observers.remove(observer)
        except ValueError:
            return
        if not observers:
            del self._observers[observer.notificationName]
        logger.debug("Dropped expired observer for '%s' in '%s'", observer.notificationName, self.path)
