# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import os
from pathlib import Path

import pytest


@pytest.fixture
def tree(tmp_path) -> Path:
    """
    Two-level directory tree with three files and one empty subdirectory.

    tree/
        a.txt
        empty/
        sub/
            b.txt
            c.txt
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_text("a")
    (root / "empty").mkdir()
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").write_text("b")
    (root / "sub" / "c.txt").write_text("c")
    return root


@pytest.fixture
def failing_unlink(monkeypatch):
    """
    Make `os.unlink` fail with the given errors for a path before removing it.

    Returns a function registering `(path, errors)`; the list of all calls
    made to `os.unlink` is available as its `calls` attribute.
    """
    original_unlink = os.unlink
    planned: dict[str, list[OSError]] = {}
    calls: list[str] = []

    def fake_unlink(path, *args, **kwargs):
        calls.append(str(path))
        remaining = planned.get(str(path))
        if remaining:
            raise remaining.pop(0)
        return original_unlink(path, *args, **kwargs)

    def plan(path: Path, errors: list[OSError]) -> None:
        planned[str(path)] = list(errors)

    plan.calls = calls  # ty: ignore[unresolved-attribute]
    monkeypatch.setattr(os, "unlink", fake_unlink)
    return plan


@pytest.fixture
def failing_rmdir(monkeypatch):
    """Same as `failing_unlink`, for `os.rmdir`."""
    original_rmdir = os.rmdir
    planned: dict[str, list[OSError]] = {}
    calls: list[str] = []

    def fake_rmdir(path, *args, **kwargs):
        calls.append(str(path))
        remaining = planned.get(str(path))
        if remaining:
            raise remaining.pop(0)
        return original_rmdir(path, *args, **kwargs)

    def plan(path: Path, errors: list[OSError]) -> None:
        planned[str(path)] = list(errors)

    plan.calls = calls  # ty: ignore[unresolved-attribute]
    monkeypatch.setattr(os, "rmdir", fake_rmdir)
    return plan
