"""Tests for host dependency checks."""

from __future__ import annotations

import pytest

from umbrel_dev.errors import MissingDependencyError
from umbrel_dev.host import (
    REQUIRED_CMDS,
    check_commands,
    host_is_debian_like,
    install_guidance,
    require_commands,
)


def test_check_commands(monkeypatch) -> None:
    present = {'git', 'vagrant'}
    monkeypatch.setattr(
        'umbrel_dev.host.which',
        lambda cmd: f'/usr/bin/{cmd}' if cmd in present else None,
    )
    assert check_commands() == ['vboxmanage']


def test_require_commands_all_present(monkeypatch) -> None:
    monkeypatch.setattr('umbrel_dev.host.which', lambda cmd: f'/usr/bin/{cmd}')
    require_commands()


@pytest.mark.parametrize('absent', REQUIRED_CMDS)
def test_require_commands_reports_each_missing_tool(monkeypatch, absent) -> None:
    monkeypatch.setattr(
        'umbrel_dev.host.which',
        lambda cmd: None if cmd == absent else f'/usr/bin/{cmd}',
    )
    with pytest.raises(MissingDependencyError) as info:
        require_commands(system='Darwin')
    assert info.value.missing == [absent]
    assert 'brew install --cask virtualbox vagrant' in str(info.value)


def test_host_is_debian_like(monkeypatch) -> None:
    monkeypatch.setattr(
        'umbrel_dev.host.Path.read_text',
        lambda self, encoding='utf-8': 'ID=ubuntu\nID_LIKE=debian\n',
    )
    assert host_is_debian_like() is True
    monkeypatch.setattr(
        'umbrel_dev.host.Path.read_text',
        lambda self, encoding='utf-8': 'ID=fedora\nID_LIKE=rhel\n',
    )
    assert host_is_debian_like() is False


def test_install_guidance_per_platform(monkeypatch) -> None:
    monkeypatch.setattr('umbrel_dev.host.host_is_debian_like', lambda: True)
    assert 'apt-get install' in install_guidance('Linux')
    monkeypatch.setattr('umbrel_dev.host.host_is_debian_like', lambda: False)
    other = install_guidance('Linux')
    assert 'https://www.vagrantup.com/downloads' in other
    assert 'Git, VirtualBox and Vagrant' in install_guidance('Windows')
    assert 'umbrel-dev#installation' in install_guidance('Darwin')
