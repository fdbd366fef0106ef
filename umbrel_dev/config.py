"""Fixed environment layout plus the optional per-user settings file."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import ubelt as ub
from loguru import logger

log = logger

MARKER_FILENAME = '.umbrel-dev'

GITHUB_URL = 'https://github.com'

REPOS = [
    'getumbrel/umbrel',
    'getumbrel/umbrel-dashboard',
    'getumbrel/umbrel-manager',
    'getumbrel/umbrel-middleware',
]

# Receives the bundled docker-compose override after cloning.
OVERRIDE_REPO = 'getumbrel/umbrel'

TEMPLATE_DIR = Path(__file__).parent / 'templates'
VAGRANTFILE_TEMPLATE = 'Vagrantfile'
COMPOSE_OVERRIDE_TEMPLATE = 'docker-compose.override.yml'

VBGUEST_PLUGIN = 'vagrant-vbguest'
VBGUEST_PLUGIN_VERSION = '0.21'

GUEST_PROJECT_DIR = '/vagrant/getumbrel/umbrel'

BOOT_PACKAGES = ['build-essential', 'linux-headers-$(uname -r)']

DEVICE_HOSTS = 'http://umbrel-dev.local'

RELOAD_SCRIPTS = ['scripts/stop', 'scripts/configure', 'scripts/start']

APP_SCRIPT = 'scripts/app'

LOGS_RETRY_DELAY = 1.0

CONFIG_ENV_VAR = 'UMBREL_DEV_CONFIG'


def repo_url(repo: str) -> str:
    return f'{GITHUB_URL}/{repo}.git'


@dataclass
class UserConfig:
    verbosity: int = 1


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR, '').strip()
    if override:
        return Path(override).expanduser()
    return Path(ub.Path.appdir('umbrel-dev', type='config')) / 'config.toml'


def load_user_config(path: Path | None = None) -> UserConfig:
    path = config_path() if path is None else path
    cfg = UserConfig()
    if not path.exists():
        return cfg
    try:
        raw = tomllib.loads(path.read_text(encoding='utf-8'))
    except (OSError, tomllib.TOMLDecodeError) as ex:
        log.warning('Ignoring unreadable config {}: {}', path, ex)
        return cfg
    if 'verbosity' in raw:
        try:
            cfg.verbosity = int(raw['verbosity'])
        except (TypeError, ValueError):
            log.warning(
                'Ignoring non-integer verbosity={!r} in {}',
                raw['verbosity'],
                path,
            )
    return cfg
