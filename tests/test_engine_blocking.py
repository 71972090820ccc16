# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import errno
import os
import stat
from unittest.mock import MagicMock, patch

import pytest

from saferm_lib.core.error import IllegalOnDirectoryError, InvalidRequestError
from saferm_lib.engine.backoff import ExponentialBackoff
from saferm_lib.engine.blocking import Remover
from saferm_lib.engine.request import RemovalRequest


def _error(number, path=None):
    return OSError(number, os.strerror(number), None if path is None else str(path))


def _remover(path, **options) -> Remover:
    options.setdefault("retry_delay", 0)
    return Remover(RemovalRequest(path, **options))


def test_remove_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("content")

    _remover(target).remove()

    assert not target.exists()


@pytest.mark.parametrize("recursive", [False, True])
def test_remove_missing_path_with_force(tmp_path, recursive):
    _remover(tmp_path / "missing", force=True, recursive=recursive).remove()


@pytest.mark.parametrize("recursive", [False, True])
def test_remove_missing_path_without_force(tmp_path, recursive):
    with pytest.raises(FileNotFoundError):
        _remover(tmp_path / "missing", recursive=recursive).remove()


@pytest.mark.parametrize("force", [False, True])
def test_remove_directory_without_recursive(tree, force):
    before = sorted(tree.rglob("*"))

    for _ in range(2):
        with pytest.raises(IllegalOnDirectoryError) as excinfo:
            _remover(tree, force=force).remove()

        assert excinfo.value.path == str(tree)
        assert sorted(tree.rglob("*")) == before


def test_remove_directory_without_recursive_does_not_touch_contents(
    tree, failing_unlink, failing_rmdir
):
    with pytest.raises(IllegalOnDirectoryError):
        _remover(tree).remove()

    assert failing_unlink.calls == []
    assert failing_rmdir.calls == []


def test_remove_tree(tree):
    entries = list(tree.rglob("*"))
    assert len(entries) == 5

    _remover(tree, recursive=True).remove()

    assert not tree.exists()
    assert not any(os.path.lexists(entry) for entry in entries)

    # removing the removed tree again succeeds with force
    _remover(tree, recursive=True, force=True).remove()


def test_remove_empty_directory(tmp_path):
    target = tmp_path / "empty"
    target.mkdir()

    _remover(target, recursive=True).remove()

    assert not target.exists()


def test_remove_broken_symlink(tmp_path):
    link = tmp_path / "link"
    link.symlink_to(tmp_path / "missing")

    _remover(link).remove()

    assert not os.path.lexists(link)


def test_remove_symlink_to_directory_keeps_target(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    (target / "keep.txt").write_text("keep")
    link = tmp_path / "link"
    link.symlink_to(target, target_is_directory=True)

    _remover(link).remove()

    assert not os.path.lexists(link)
    assert (target / "keep.txt").exists()


def test_walk_removes_nested_directory_symlink_without_following(tree, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "keep.txt").write_text("keep")
    (tree / "sub" / "link").symlink_to(outside, target_is_directory=True)

    _remover(tree, recursive=True).remove()

    assert not tree.exists()
    assert (outside / "keep.txt").exists()


def test_walk_removes_broken_symlink(tree, tmp_path):
    (tree / "broken").symlink_to(tmp_path / "missing")

    _remover(tree, recursive=True).remove()

    assert not tree.exists()


def test_file_retried_until_success(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)] * 3)

    _remover(target, max_retries=3).remove()

    assert not target.exists()
    assert len(failing_unlink.calls) == 4


def test_file_retries_exhausted(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)] * 4)

    with pytest.raises(OSError) as excinfo:
        _remover(target, max_retries=3).remove()

    assert excinfo.value.errno == errno.EBUSY
    assert len(failing_unlink.calls) == 4
    assert target.exists()


def test_no_retries_by_default(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EMFILE, target)])

    with pytest.raises(OSError):
        _remover(target).remove()

    assert len(failing_unlink.calls) == 1


def test_fatal_error_is_not_retried(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EACCES, target)])

    with pytest.raises(PermissionError):
        _remover(target, max_retries=5).remove()

    assert len(failing_unlink.calls) == 1


def test_directory_retried_on_not_empty(tree, failing_rmdir):
    failing_rmdir(tree, [_error(errno.ENOTEMPTY, tree)] * 2)

    _remover(tree, recursive=True, max_retries=2).remove()

    assert not tree.exists()
    assert failing_rmdir.calls.count(str(tree)) == 3


def test_directory_not_empty_retries_exhausted(tree, failing_rmdir):
    failing_rmdir(tree, [_error(errno.ENOTEMPTY, tree)] * 3)

    with pytest.raises(OSError) as excinfo:
        _remover(tree, recursive=True, max_retries=2).remove()

    assert excinfo.value.errno == errno.ENOTEMPTY
    assert failing_rmdir.calls.count(str(tree)) == 3
    assert tree.exists()


@patch("saferm_lib.engine.blocking.busy_wait")
def test_fixed_delays_between_retries(mock_busy_wait, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)] * 3)

    _remover(target, max_retries=3, retry_delay=100).remove()

    assert [c.args[0] for c in mock_busy_wait.call_args_list] == [100, 100, 100]


@patch("saferm_lib.engine.blocking.busy_wait")
def test_exponential_delays_between_retries(mock_busy_wait, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)] * 4)

    _remover(
        target, max_retries=4, retry_delay=100, backoff=ExponentialBackoff(100)
    ).remove()

    assert [c.args[0] for c in mock_busy_wait.call_args_list] == [100, 120, 144, 172]


@patch("saferm_lib.engine.blocking.busy_wait")
def test_no_wait_without_retry(mock_busy_wait, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)])

    with pytest.raises(OSError):
        _remover(target, max_retries=0, retry_delay=100).remove()

    mock_busy_wait.assert_not_called()


def test_file_disappearing_after_lstat_with_force(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.ENOENT, target)])

    _remover(target, force=True, max_retries=3).remove()

    assert len(failing_unlink.calls) == 1


def test_file_disappearing_after_lstat_without_force(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.ENOENT, target)])

    with pytest.raises(FileNotFoundError):
        _remover(target, max_retries=3).remove()

    # missing entries are never retried
    assert len(failing_unlink.calls) == 1


def test_directory_disappearing_before_rmdir_with_force(tree, failing_rmdir):
    failing_rmdir(tree, [_error(errno.ENOENT, tree)])

    _remover(tree, recursive=True, force=True).remove()

    assert list(tree.iterdir()) == []


def test_directory_disappearing_before_rmdir_without_force(tree, failing_rmdir):
    failing_rmdir(tree, [_error(errno.ENOENT, tree)])

    with pytest.raises(FileNotFoundError):
        _remover(tree, recursive=True).remove()


def _vanishing_lstat(monkeypatch, vanishing):
    """Make `vanishing` disappear right before it is examined."""
    original_lstat = os.lstat

    def _lexists(p):
        try:
            original_lstat(p)
        except OSError:
            return False
        return True

    def fake_lstat(path, *args, **kwargs):
        if str(path) == str(vanishing) and _lexists(vanishing):
            os.unlink(vanishing)
            raise _error(errno.ENOENT, path)
        return original_lstat(path, *args, **kwargs)

    monkeypatch.setattr(os, "lstat", fake_lstat)


def test_child_disappearing_during_walk_with_force(tree, monkeypatch):
    _vanishing_lstat(monkeypatch, tree / "a.txt")

    _remover(tree, recursive=True, force=True).remove()

    assert not tree.exists()


def test_child_disappearing_during_walk_without_force(tree, monkeypatch):
    _vanishing_lstat(monkeypatch, tree / "a.txt")

    with pytest.raises(FileNotFoundError):
        _remover(tree, recursive=True).remove()

    assert tree.exists()


def test_directory_disappearing_before_listing(tree, monkeypatch):
    original_listdir = os.listdir

    def fake_listdir(path):
        if str(path) == str(tree):
            raise _error(errno.ENOENT, path)
        return original_listdir(path)

    monkeypatch.setattr(os, "listdir", fake_listdir)

    _remover(tree, recursive=True, force=True).remove()

    with pytest.raises(FileNotFoundError):
        _remover(tree, recursive=True).remove()


def test_listing_error_is_propagated(tree, monkeypatch):
    def fake_listdir(path):
        raise _error(errno.EACCES, path)

    monkeypatch.setattr(os, "listdir", fake_listdir)

    with pytest.raises(PermissionError):
        _remover(tree, recursive=True, force=True).remove()

    assert tree.exists()


def test_child_failure_aborts_walk(tree, failing_unlink, failing_rmdir):
    failing_unlink(tree / "a.txt", [_error(errno.EACCES, tree / "a.txt")])

    with pytest.raises(PermissionError):
        _remover(tree, recursive=True, force=True).remove()

    assert tree.exists()
    assert (tree / "a.txt").exists()
    assert str(tree) not in failing_rmdir.calls


def test_lstat_error_on_target_is_propagated(tmp_path, monkeypatch):
    target = tmp_path / "file.txt"
    target.write_text("content")

    def fake_lstat(path, *args, **kwargs):
        raise _error(errno.EACCES, path)

    monkeypatch.setattr(os, "lstat", fake_lstat)

    with pytest.raises(PermissionError):
        _remover(target, force=True).remove()


@patch("saferm_lib.engine.blocking.repair_permissions")
def test_permission_repair_on_eperm(mock_repair, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    error = _error(errno.EPERM, target)
    failing_unlink(target, [error])

    _remover(target, repair_permissions=True).remove()

    mock_repair.assert_called_once_with(target, error)
    assert len(failing_unlink.calls) == 1


@patch("saferm_lib.engine.blocking.busy_wait")
@patch("saferm_lib.engine.blocking.repair_permissions")
def test_permission_repair_does_not_consume_retries(
    mock_repair, mock_busy_wait, tmp_path, failing_unlink
):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EPERM, target)])

    _remover(target, repair_permissions=True, max_retries=3).remove()

    mock_repair.assert_called_once()
    mock_busy_wait.assert_not_called()


def test_permission_repair_failure_falls_back_to_retry(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EPERM, target)])

    def failed_repair(_path, error):
        raise error

    with patch(
        "saferm_lib.engine.blocking.repair_permissions", side_effect=failed_repair
    ) as mock_repair:
        _remover(target, repair_permissions=True, max_retries=1).remove()

    mock_repair.assert_called_once()
    assert len(failing_unlink.calls) == 2
    assert not target.exists()


def test_permission_repair_failure_raises_original_error(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    error = _error(errno.EPERM, target)
    failing_unlink(target, [error])

    def failed_repair(_path, original):
        raise original

    with patch(
        "saferm_lib.engine.blocking.repair_permissions", side_effect=failed_repair
    ):
        with pytest.raises(OSError) as excinfo:
            _remover(target, repair_permissions=True).remove()

    assert excinfo.value is error


@patch("saferm_lib.engine.blocking.repair_permissions")
def test_permission_repair_disabled(mock_repair, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EPERM, target)])

    with pytest.raises(PermissionError):
        _remover(target, repair_permissions=False).remove()

    mock_repair.assert_not_called()


@patch("saferm_lib.engine.blocking.repair_permissions")
def test_permission_repair_only_for_eperm(mock_repair, tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EBUSY, target)])

    with pytest.raises(OSError):
        _remover(target, repair_permissions=True).remove()

    mock_repair.assert_not_called()


def test_permission_repair_removes_entry(tmp_path, failing_unlink):
    target = tmp_path / "file.txt"
    target.write_text("content")
    failing_unlink(target, [_error(errno.EPERM, target)])

    _remover(target, repair_permissions=True).remove()

    assert not target.exists()
    # the failed removal and the removal after the repair
    assert len(failing_unlink.calls) == 2


def test_permission_repair_of_directory(tree, failing_rmdir):
    failing_rmdir(tree, [_error(errno.EPERM, tree)])

    _remover(tree, recursive=True, repair_permissions=True).remove()

    assert not tree.exists()
    assert failing_rmdir.calls.count(str(tree)) == 2


def test_walk_uses_single_entry_removal_for_children(tree):
    remover = _remover(tree, recursive=True)
    remover.removeEntry = MagicMock(wraps=remover.removeEntry)

    remover.remove()

    removed = {(str(c.args[0]), c.kwargs["directory"]) for c in remover.removeEntry.call_args_list}
    assert removed == {
        (str(tree / "a.txt"), False),
        (str(tree / "sub" / "b.txt"), False),
        (str(tree / "sub" / "c.txt"), False),
        (str(tree / "sub"), True),
        (str(tree / "empty"), True),
        (str(tree), True),
    }


def test_permission_repair_of_symlink_keeps_target(tmp_path, failing_unlink):
    outside = tmp_path / "outside"
    outside.mkdir()
    os.chmod(outside, 0o755)
    (outside / "keep.txt").write_text("keep")
    link = tmp_path / "link"
    link.symlink_to(outside, target_is_directory=True)
    failing_unlink(link, [_error(errno.EPERM, link)])

    _remover(link, max_retries=1, repair_permissions=True).remove()

    assert not os.path.lexists(link)
    assert stat.S_IMODE(os.stat(outside).st_mode) == 0o755
    assert (outside / "keep.txt").exists()


@pytest.mark.parametrize("force", [False, True])
def test_empty_path_never_touches_working_directory(tmp_path, monkeypatch, force):
    (tmp_path / "precious.txt").write_text("precious")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(InvalidRequestError):
        _remover("", recursive=True, force=force).remove()

    assert (tmp_path / "precious.txt").exists()
