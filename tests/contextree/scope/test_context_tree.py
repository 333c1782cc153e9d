# tests/contextree/scope/test_context_tree.py
from __future__ import annotations
import gc

import pytest

from contextree import Context, GlobalContext, RequestableName, getGlobalContext


class ScreenContext(Context):
    pass


# ----------------------------
# Creation
# ----------------------------

def test_globalContext_isRootWithoutSupercontext(root: GlobalContext) -> None:
    assert getGlobalContext() is root
    assert root.supercontext is None
    assert root.path == "global"


def test_createSubcontext_linksBothWays(root: GlobalContext) -> None:
    app = root.createSubcontext("app")
    screen = app.createSubcontext("screen")

    assert screen.supercontext is app
    assert app.supercontext is root
    assert root.subcontexts == [app]
    assert app.subcontexts == [screen]
    assert screen.path == "global/app/screen"


def test_createSubcontext_ofType_defaultsNameToClassName(root: GlobalContext) -> None:
    screen = root.createSubcontext(ofType=ScreenContext)
    named = root.createSubcontext("settings", ofType=ScreenContext)

    assert isinstance(screen, ScreenContext)
    assert screen.name == "ScreenContext"
    assert named.name == "settings"
    assert root.subcontexts == [screen, named]


def test_createSubcontext_rejectsNonContextTypesAndRoots(root: GlobalContext) -> None:
    with pytest.raises(TypeError):
        root.createSubcontext("x", ofType=dict)  # type: ignore[type-var]
    with pytest.raises(TypeError):
        root.createSubcontext(ofType=GlobalContext)
    with pytest.raises(TypeError):
        root.createSubcontext()


def test_contextIds_areUnique(root: GlobalContext) -> None:
    first = root.createSubcontext("same")
    second = root.createSubcontext("same")
    assert first.id != second.id
    assert first != second


def test_trees_listAncestorsSelfAndDescendants(root: GlobalContext) -> None:
    app = root.createSubcontext("app")
    left = app.createSubcontext("left")
    leftChild = left.createSubcontext("leftChild")
    right = app.createSubcontext("right")

    assert left.supercontextTree == [app, root]
    assert app.subcontextTree == [left, leftChild, right]
    assert left.contextTree == [app, root, left, leftChild]


# ----------------------------
# Ownership
# ----------------------------

def test_releasingLeaf_removesItFromParent(root: GlobalContext) -> None:
    parent = root.createSubcontext("parent")
    leaf = parent.createSubcontext("leaf")
    assert len(parent.subcontexts) == 1

    del leaf
    gc.collect()

    assert parent.subcontexts == []
    # Parent stays alive and usable
    again = parent.createSubcontext("leaf")
    assert parent.subcontexts == [again]


def test_treeDoesNotKeepSubtreeAlive(root: GlobalContext) -> None:
    parent = root.createSubcontext("parent")
    middle = parent.createSubcontext("middle")
    middle.createSubcontext("orphan")

    # Nobody holds "orphan"
    gc.collect()
    assert middle.subcontexts == []

    del middle
    gc.collect()
    assert parent.subcontexts == []


def test_leafKeepsAncestorsAlive(root: GlobalContext) -> None:
    leaf = root.createSubcontext("parent").createSubcontext("leaf")
    gc.collect()

    assert leaf.supercontext is not None
    assert leaf.path == "global/parent/leaf"
    assert [context.name for context in root.subcontexts] == ["parent"]


def test_release_forgetsChildButChildStillResolvesUpward(root: GlobalContext) -> None:
    total = RequestableName("total")
    parent = root.createSubcontext("parent")
    child = parent.createSubcontext("child")
    parent.addRequestable(total, lambda: 3)

    assert parent.release(child) is True
    assert parent.release(child) is False
    assert parent.subcontexts == []
    assert child.request(total) == 3


def test_detach_cutsContextOffFromTree(root: GlobalContext) -> None:
    parent = root.createSubcontext("parent")
    child = parent.createSubcontext("child")

    child.detach()

    assert child.supercontext is None
    assert parent.subcontexts == []
    assert child.path == "child"
