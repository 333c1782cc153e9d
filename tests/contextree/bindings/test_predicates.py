# tests/contextree/bindings/test_predicates.py
from __future__ import annotations
import gc

import pytest

from contextree.bindings.predicates import (
    HostLifecycle,
    always,
    expiresWithObject,
    never,
    resolveExpiry,
)


class Owner:
    pass


class View:
    def __init__(self) -> None:
        self.active = True

    def isActive(self) -> bool:
        return self.active


def test_defaults_areAvailableAndNeverExpire() -> None:
    available, expired = resolveExpiry(None)
    assert available is always
    assert expired is never


def test_explicitPredicates_passThrough() -> None:
    isOpen = lambda: False  # noqa: E731
    isGone = lambda: True  # noqa: E731
    available, expired = resolveExpiry(isOpen, isExpired=isGone)
    assert available is isOpen
    assert expired is isGone


def test_expiresWith_tracksCollection() -> None:
    owner = Owner()
    available, expired = resolveExpiry(None, expiresWith=owner)
    assert available() and not expired()

    del owner
    gc.collect()
    assert expired()


def test_expiresWithObject_needsWeakReferenceable() -> None:
    with pytest.raises(TypeError):
        expiresWithObject(42)


def test_ifActive_availabilityFollowsHost_expiryFollowsLifetime() -> None:
    view = View()
    assert isinstance(view, HostLifecycle)
    available, expired = resolveExpiry(None, ifActive=view)

    view.active = False
    assert not available()
    assert not expired()

    del view
    gc.collect()
    assert not available()
    assert expired()


def test_whileActive_expiresAsSoonAsHostLeaves() -> None:
    view = View()
    available, expired = resolveExpiry(None, whileActive=view)
    assert available() and not expired()

    view.active = False
    assert expired()


def test_hostForms_doNotHoldTheHost() -> None:
    view = View()
    resolveExpiry(None, ifActive=view)
    probe = expiresWithObject(view)

    del view
    gc.collect()
    assert probe()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"isExpired": never, "expiresWith": Owner()},
        {"ifActive": View(), "whileActive": View()},
        {"isExpired": never, "ifActive": View()},
    ],
)
def test_severalExpiryForms_areRejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        resolveExpiry(None, **kwargs)


def test_hostForms_refuseExplicitAvailability() -> None:
    with pytest.raises(ValueError):
        resolveExpiry(always, ifActive=View())


def test_nonCallablesAndNonHosts_areRejected() -> None:
    with pytest.raises(TypeError):
        resolveExpiry(True)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        resolveExpiry(None, isExpired="soon")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        resolveExpiry(None, ifActive=Owner())  # type: ignore[arg-type]
