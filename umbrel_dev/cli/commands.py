"""CLI commands for environment setup, VM lifecycle, and in-VM workflows."""

from __future__ import annotations

import threading
from pathlib import Path

import scriptconfig as scfg

from ..environment import init_environment
from ..vm import (
    app as vm_app,
    boot,
    containers,
    destroy,
    rebuild,
    reload,
    run as vm_run,
    shutdown,
    ssh as vm_ssh,
    stream_logs,
)
from ._common import _BaseCommand, _dev_root, _require_arg, log


class InitCLI(_BaseCommand):
    """Initialize an Umbrel development environment in the working directory."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        init_environment(Path.cwd(), dry_run=args.dry_run)
        if args.dry_run:
            return 0
        print()
        print('Your development environment is now setup')
        print('You can boot your development VM with:')
        print()
        print('  umbrel-dev boot')
        return 0


class BootCLI(_BaseCommand):
    """Boot the development VM."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        boot(_dev_root(), dry_run=args.dry_run)
        return 0


class ShutdownCLI(_BaseCommand):
    """Shutdown the development VM."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        shutdown(_dev_root(), dry_run=args.dry_run)
        return 0


class DestroyCLI(_BaseCommand):
    """Destroy the development VM."""

    yes = scfg.Value(
        False,
        isflag=True,
        help='Skip the vagrant confirmation prompt.',
    )
    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        destroy(_dev_root(), force=bool(args.yes), dry_run=args.dry_run)
        return 0


class ContainersCLI(_BaseCommand):
    """List container services."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        containers(_dev_root(), dry_run=args.dry_run)
        return 0


class RebuildCLI(_BaseCommand):
    """Rebuild a container service."""

    container = scfg.Value(
        '', type=str, position=1, help='Container service to rebuild.'
    )
    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        root = _dev_root()
        container = _require_arg(
            args.container, 'A second argument is required!'
        )
        rebuild(root, container, dry_run=args.dry_run)
        return 0


class ReloadCLI(_BaseCommand):
    """Reload the Umbrel service."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        reload(_dev_root(), dry_run=args.dry_run)
        return 0


class AppCLI(_BaseCommand):
    """Manage app installations."""

    app_args = scfg.Value(
        [], help='Arguments forwarded verbatim to scripts/app.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        root = _dev_root()
        return vm_app(root, [str(a) for a in (args.app_args or [])])


class LogsCLI(_BaseCommand):
    """Stream Umbrel logs."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        cls.cli(argv=argv, data=kwargs)
        root = _dev_root()
        stop = threading.Event()
        try:
            stream_logs(root, stop)
        except KeyboardInterrupt:
            stop.set()
            log.info('Stopped streaming logs')
            return 130
        return 0


class RunCLI(_BaseCommand):
    """Run a command inside the development VM."""

    shell_command = scfg.Value(
        '',
        type=str,
        position=1,
        help='Shell command to run in the VM project directory.',
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        root = _dev_root()
        command = _require_arg(args.shell_command, 'A run command is required!')
        return vm_run(root, command)


class SSHCLI(_BaseCommand):
    """Get an SSH session inside the development VM."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        cls.cli(argv=argv, data=kwargs)
        return vm_ssh(_dev_root())
