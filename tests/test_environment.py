"""Tests for environment discovery and init."""

from __future__ import annotations

from pathlib import Path

import pytest

from umbrel_dev.config import (
    COMPOSE_OVERRIDE_TEMPLATE,
    MARKER_FILENAME,
    OVERRIDE_REPO,
    REPOS,
)
from umbrel_dev.environment import (
    find_dev_root,
    init_environment,
    require_dev_root,
)
from umbrel_dev.errors import DirectoryNotEmptyError, NotInitializedError
from umbrel_dev.util import CmdError, CmdResult


def _fake_clone(calls):
    def fake_run_cmd(cmd, **kwargs):
        calls.append(list(cmd))
        if cmd[:2] == ['git', 'clone']:
            (Path(kwargs['cwd']) / cmd[3]).mkdir(parents=True)
        return CmdResult(0, '', '')

    return fake_run_cmd


def test_find_dev_root_walks_upward(tmp_path: Path) -> None:
    (tmp_path / MARKER_FILENAME).touch()
    deep = tmp_path / 'getumbrel' / 'umbrel' / 'scripts'
    deep.mkdir(parents=True)
    assert find_dev_root(deep) == tmp_path
    assert require_dev_root(deep) == tmp_path


def test_find_dev_root_prefers_nearest_marker(tmp_path: Path) -> None:
    inner = tmp_path / 'inner'
    inner.mkdir()
    (tmp_path / MARKER_FILENAME).touch()
    (inner / MARKER_FILENAME).touch()
    assert find_dev_root(inner) == inner


def test_find_dev_root_missing(tmp_path: Path) -> None:
    deep = tmp_path / 'a' / 'b'
    deep.mkdir(parents=True)
    assert find_dev_root(deep) is None
    with pytest.raises(NotInitializedError, match='development environment'):
        require_dev_root(deep)


def test_init_refuses_non_empty_dir(monkeypatch, tmp_path: Path) -> None:
    calls = []
    monkeypatch.setattr('umbrel_dev.environment.run_cmd', _fake_clone(calls))
    (tmp_path / '.hidden').write_text('x')
    with pytest.raises(DirectoryNotEmptyError):
        init_environment(tmp_path)
    assert calls == []
    assert not (tmp_path / MARKER_FILENAME).exists()


def test_init_populates_empty_dir(monkeypatch, tmp_path: Path) -> None:
    calls = []
    monkeypatch.setattr('umbrel_dev.environment.run_cmd', _fake_clone(calls))
    init_environment(tmp_path)

    assert calls[0] == [
        'vagrant',
        'plugin',
        'install',
        'vagrant-vbguest',
        '--plugin-version',
        '0.21',
    ]
    clones = [c for c in calls if c[:2] == ['git', 'clone']]
    assert [c[3] for c in clones] == REPOS
    assert clones[0][2] == 'https://github.com/getumbrel/umbrel.git'

    assert (tmp_path / MARKER_FILENAME).is_file()
    assert (tmp_path / MARKER_FILENAME).stat().st_size == 0
    assert (tmp_path / 'Vagrantfile').is_file()
    for repo in REPOS:
        assert (tmp_path / repo).is_dir()
    overrides = sorted(tmp_path.rglob(COMPOSE_OVERRIDE_TEMPLATE))
    assert overrides == [tmp_path / OVERRIDE_REPO / COMPOSE_OVERRIDE_TEMPLATE]


def test_init_failed_clone_leaves_no_marker(monkeypatch, tmp_path: Path) -> None:
    def fake_run_cmd(cmd, **kwargs):
        if cmd[:2] == ['git', 'clone'] and cmd[3] == REPOS[1]:
            raise CmdError(cmd, CmdResult(128, '', 'fatal: network'))
        if cmd[:2] == ['git', 'clone']:
            (Path(kwargs['cwd']) / cmd[3]).mkdir(parents=True)
        return CmdResult(0, '', '')

    monkeypatch.setattr('umbrel_dev.environment.run_cmd', fake_run_cmd)
    with pytest.raises(CmdError):
        init_environment(tmp_path)
    assert (tmp_path / REPOS[0]).is_dir()
    assert not (tmp_path / MARKER_FILENAME).exists()


def test_init_dry_run_touches_nothing(monkeypatch, tmp_path: Path) -> None:
    def fail_run_cmd(cmd, **kwargs):
        raise AssertionError(f'Unexpected command: {cmd!r}')

    monkeypatch.setattr('umbrel_dev.environment.run_cmd', fail_run_cmd)
    init_environment(tmp_path, dry_run=True)
    assert list(tmp_path.iterdir()) == []
