"""Discovery and creation of an initialized development environment."""

from __future__ import annotations

import shutil
from pathlib import Path

from loguru import logger

from .config import (
    COMPOSE_OVERRIDE_TEMPLATE,
    GITHUB_URL,
    MARKER_FILENAME,
    OVERRIDE_REPO,
    REPOS,
    TEMPLATE_DIR,
    VAGRANTFILE_TEMPLATE,
    VBGUEST_PLUGIN,
    VBGUEST_PLUGIN_VERSION,
    repo_url,
)
from .errors import DirectoryNotEmptyError, NotInitializedError
from .runtime import vagrant_cmd
from .util import dir_is_empty, run_cmd, shell_join

log = logger


def find_dev_root(start: Path | None = None) -> Path | None:
    """
    Walk upward from ``start`` and return the first directory holding the
    marker file, or None when the filesystem root is reached without one.
    """
    here = Path.cwd() if start is None else Path(start)
    here = here.absolute()
    for cand in (here, *here.parents):
        if (cand / MARKER_FILENAME).exists():
            log.debug('Found development environment root: {}', cand)
            return cand
    return None


def require_dev_root(start: Path | None = None) -> Path:
    root = find_dev_root(start)
    if root is None:
        raise NotInitializedError(
            'This must only be run inside an Umbrel development environment'
        )
    return root


def init_environment(dest: Path, *, dry_run: bool = False) -> Path:
    """
    Populate an empty directory with a Vagrantfile, the vbguest plugin, the
    Umbrel repositories and the compose override, then drop the marker.

    A failed clone leaves the directory partially populated and unmarked.
    """
    dest = Path(dest).absolute()
    if not dir_is_empty(dest):
        raise DirectoryNotEmptyError('Working directory must be empty!')

    steps: list[tuple[str, list[str]]] = [
        (
            f'Installing {VBGUEST_PLUGIN} plugin...',
            vagrant_cmd(
                'plugin',
                'install',
                VBGUEST_PLUGIN,
                '--plugin-version',
                VBGUEST_PLUGIN_VERSION,
            ),
        )
    ]
    for repo in REPOS:
        steps.append(
            (
                f'Cloning {GITHUB_URL}/{repo}...',
                ['git', 'clone', repo_url(repo), repo],
            )
        )

    if dry_run:
        log.info(
            'DRYRUN: cp {} {}', TEMPLATE_DIR / VAGRANTFILE_TEMPLATE, dest
        )
        for _, cmd in steps:
            log.info('DRYRUN: {}', shell_join(cmd))
        log.info(
            'DRYRUN: cp {} {}',
            TEMPLATE_DIR / COMPOSE_OVERRIDE_TEMPLATE,
            dest / OVERRIDE_REPO,
        )
        log.info('DRYRUN: touch {}', dest / MARKER_FILENAME)
        return dest

    print('Creating Vagrantfile...')
    shutil.copyfile(
        TEMPLATE_DIR / VAGRANTFILE_TEMPLATE, dest / VAGRANTFILE_TEMPLATE
    )
    for message, cmd in steps:
        print()
        print(message)
        run_cmd(cmd, check=True, capture=False, cwd=dest)

    print()
    print(f'Adding {COMPOSE_OVERRIDE_TEMPLATE}...')
    shutil.copyfile(
        TEMPLATE_DIR / COMPOSE_OVERRIDE_TEMPLATE,
        dest / OVERRIDE_REPO / COMPOSE_OVERRIDE_TEMPLATE,
    )
    (dest / MARKER_FILENAME).touch()
    log.info('Initialized development environment at {}', dest)
    return dest
