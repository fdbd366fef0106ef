"""Host dependency checks and per-platform installation guidance."""

from __future__ import annotations

import platform
import textwrap
from pathlib import Path
from shutil import which

from loguru import logger

from .errors import MissingDependencyError

log = logger

REQUIRED_CMDS = ['git', 'vagrant', 'vboxmanage']

INSTALL_DOCS_URL = 'https://github.com/getumbrel/umbrel-dev#installation'


def check_commands() -> list[str]:
    return [c for c in REQUIRED_CMDS if which(c) is None]


def host_is_debian_like() -> bool:
    try:
        data = Path('/etc/os-release').read_text(encoding='utf-8')
        return any(
            k in data for k in ('ID=debian', 'ID=ubuntu', 'ID_LIKE=debian')
        )
    except Exception:
        return False


def install_guidance(system: str | None = None) -> str:
    """Human readable instructions for installing the missing host tools."""
    system = system or platform.system()
    if system == 'Darwin':
        hint = textwrap.dedent("""
            Install them with Homebrew:
              brew install git
              brew install --cask virtualbox vagrant
            """)
    elif system == 'Linux' and host_is_debian_like():
        hint = textwrap.dedent("""
            Install them with apt:
              sudo apt-get install -y git virtualbox vagrant
            """)
    else:
        hint = textwrap.dedent("""
            Install them from the vendors' download pages:
              https://git-scm.com/downloads
              https://www.virtualbox.org/wiki/Downloads
              https://www.vagrantup.com/downloads
            """)
    lines = [
        'This script requires Git, VirtualBox and Vagrant to be installed.',
        hint.strip('\n'),
        f'See: {INSTALL_DOCS_URL}',
    ]
    return '\n'.join(lines)


def require_commands(system: str | None = None) -> None:
    missing = check_commands()
    if missing:
        log.debug('Missing host commands: {}', missing)
        raise MissingDependencyError(missing, install_guidance(system))
    log.debug('Host commands present: {}', REQUIRED_CMDS)
