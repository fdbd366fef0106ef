"""VM lifecycle and in-VM operations driven through vagrant."""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Protocol, Sequence

from loguru import logger

from .config import (
    APP_SCRIPT,
    BOOT_PACKAGES,
    DEVICE_HOSTS,
    GUEST_PROJECT_DIR,
    LOGS_RETRY_DELAY,
    RELOAD_SCRIPTS,
)
from .runtime import GuestCommand, run_in_vm, vagrant_cmd, vm_ssh_cmd
from .util import CmdResult, run_cmd, shell_join

log = logger


class StopToken(Protocol):
    def is_set(self) -> bool: ...

    def wait(self, timeout: float | None = None) -> bool: ...


def _vagrant(
    root: Path, *args: str, check: bool = True, dry_run: bool = False
) -> CmdResult | None:
    cmd = vagrant_cmd(*args)
    if dry_run:
        log.info('DRYRUN: {}', shell_join(cmd))
        return None
    return run_cmd(cmd, check=check, capture=False, cwd=root)


def _in_vm(
    root: Path,
    *commands: GuestCommand,
    workdir: str | None = GUEST_PROJECT_DIR,
    dry_run: bool = False,
) -> CmdResult | None:
    if dry_run:
        cmd = vm_ssh_cmd(*commands, workdir=workdir)
        log.info('DRYRUN: {}', shell_join(cmd))
        return None
    return run_in_vm(root, *commands, workdir=workdir)


def boot_packages_commands() -> list[GuestCommand]:
    return [
        GuestCommand.of('sudo', 'apt-get', 'update'),
        # Left unquoted so $(uname -r) expands in the guest.
        GuestCommand.shell(
            'sudo apt-get install -y ' + ' '.join(BOOT_PACKAGES)
        ),
    ]


def boot(root: Path, *, dry_run: bool = False) -> None:
    print('Booting development VM.')
    print('This will take a while if this is the first boot...')
    print()
    # vagrant-vbguest needs kernel headers before it provisions reliably, so
    # boot bare, install them, reboot, and only then provision.
    res = _vagrant(root, 'up', '--no-provision', check=False, dry_run=dry_run)
    if res is not None and res.code != 0:
        log.warning(
            'Initial unprovisioned boot exited with code={}; continuing',
            res.code,
        )
    _in_vm(root, *boot_packages_commands(), workdir=None, dry_run=dry_run)
    _vagrant(root, 'halt', dry_run=dry_run)
    _vagrant(root, 'up', dry_run=dry_run)


def shutdown(root: Path, *, dry_run: bool = False) -> None:
    print('Shutting down development VM...')
    _vagrant(root, 'halt', dry_run=dry_run)


def destroy(root: Path, *, force: bool = False, dry_run: bool = False) -> None:
    print('Removing the development VM...')
    print(
        'WARNING: this is irreversible. The VM disk and state are deleted and '
        'the next boot provisions from scratch.'
    )
    args = ['destroy', '--force'] if force else ['destroy']
    _vagrant(root, *args, dry_run=dry_run)


def containers(root: Path, *, dry_run: bool = False) -> None:
    _in_vm(
        root,
        GuestCommand.of('docker-compose', 'config', '--services'),
        dry_run=dry_run,
    )


def rebuild_commands(container: str) -> list[GuestCommand]:
    return [
        GuestCommand.of('docker-compose', 'build', container),
        GuestCommand.of('docker-compose', 'stop', container),
        GuestCommand.of('docker-compose', 'rm', '-f', container),
        GuestCommand.of(
            'docker-compose', 'up', '-d', container, DEVICE_HOSTS=DEVICE_HOSTS
        ),
    ]


def rebuild(root: Path, container: str, *, dry_run: bool = False) -> None:
    log.info('Rebuilding container {}', container)
    _in_vm(root, *rebuild_commands(container), dry_run=dry_run)


def reload_commands() -> list[GuestCommand]:
    return [GuestCommand.of('sudo', script) for script in RELOAD_SCRIPTS]


def reload(root: Path, *, dry_run: bool = False) -> None:
    print('Reloading the Umbrel service...')
    print()
    _in_vm(root, *reload_commands(), dry_run=dry_run)


def app(root: Path, args: Sequence[str]) -> int:
    res = run_in_vm(root, GuestCommand.of(APP_SCRIPT, *args), check=False)
    return res.code


def stream_logs(
    root: Path,
    stop: StopToken | None = None,
    *,
    delay: float = LOGS_RETRY_DELAY,
) -> None:
    """
    Follow docker-compose logs inside the VM, restarting the stream whenever
    it ends.

    There is no retry cap. The loop only returns once ``stop`` is set, which
    lets callers cancel it cleanly from a signal handler or another thread.
    """
    stop = threading.Event() if stop is None else stop
    follow = GuestCommand.of('docker-compose', 'logs', '-f')
    while not stop.is_set():
        res = run_in_vm(root, follow, check=False)
        if stop.is_set():
            break
        log.debug('Log stream ended with code={}', res.code)
        print(f'{time.strftime("%H:%M:%S")} Trying again in 1 second...')
        stop.wait(delay)


def run(root: Path, command: str) -> int:
    res = run_in_vm(root, GuestCommand.shell(command), check=False)
    return res.code


def ssh(root: Path) -> int:
    res = run_in_vm(root, GuestCommand.of('bash'), check=False)
    return res.code
