"""Top-level modal CLI wiring, argument pass-through, and logging setup."""

from __future__ import annotations

import os
import sys

import scriptconfig as scfg
from loguru import logger

from ..config import load_user_config
from ..errors import UmbrelDevError
from ..host import require_commands
from ..util import CmdError, exit_status
from ._common import log
from .commands import (
    AppCLI,
    BootCLI,
    ContainersCLI,
    DestroyCLI,
    InitCLI,
    LogsCLI,
    RebuildCLI,
    ReloadCLI,
    RunCLI,
    SSHCLI,
    ShutdownCLI,
)
from .help import HelpCLI, _iter_modal_members

# Everything after these command names is forwarded untouched.
_PASSTHROUGH = {'app', 'run'}


class UmbrelDevModalCLI(scfg.ModalCLI):
    """Automatically initialize and manage an Umbrel development environment."""

    help = HelpCLI
    init = InitCLI
    boot = BootCLI
    shutdown = ShutdownCLI
    destroy = DestroyCLI
    containers = ContainersCLI
    rebuild = RebuildCLI
    reload = ReloadCLI
    app = AppCLI
    logs = LogsCLI
    run = RunCLI
    ssh = SSHCLI


COMMANDS = frozenset(
    name for name, _ in _iter_modal_members(UmbrelDevModalCLI)
)


def dispatch(argv: list[str]) -> int:
    """
    Check host tools, then route ``argv`` to a single command.

    Returns the exit status for the process. Unknown or missing commands
    print the help text and yield 1.
    """
    require_commands()
    command = argv[0] if argv else ''
    if command not in COMMANDS or command == 'help':
        return HelpCLI.main(argv=False)
    if command == 'app':
        rc = AppCLI.main(argv=False, app_args=list(argv[1:]))
    elif command == 'run':
        rc = RunCLI.main(
            argv=False, shell_command=argv[1] if len(argv) > 1 else ''
        )
    else:
        rc = UmbrelDevModalCLI.main(argv=argv, _noexit=True)
    return 0 if rc is None else int(rc)


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    command = argv[0] if argv else ''
    explicit_verbose = 0 if command in _PASSTHROUGH else _count_verbose(argv[1:])
    _setup_logging(explicit_verbose, load_user_config().verbosity)

    try:
        rc = dispatch(argv)
    except KeyboardInterrupt:
        log.info('Interrupted')
        sys.exit(130)
    except UmbrelDevError as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        sys.exit(1)
    except CmdError as ex:
        log.debug('External command failed: {}', ex)
        sys.exit(exit_status(ex.result.code) or 1)
    except Exception as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('Unhandled umbrel-dev error: {}', ex)
        sys.exit(2)

    if _asks_command_help(argv):
        sys.exit(0)
    sys.exit(exit_status(rc))


def _asks_command_help(argv: list[str]) -> bool:
    """True for `<command> --help` on a real command; the fallback keeps 1."""
    command = argv[0] if argv else ''
    if command not in COMMANDS or command == 'help':
        return False
    if command in _PASSTHROUGH:
        return False
    return any(flag in argv for flag in ('-h', '--help'))


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    effective_verbosity = args_verbose if args_verbose > 0 else cfg_verbosity
    level = 'WARNING'
    if effective_verbosity == 1:
        level = 'INFO'
    elif effective_verbosity >= 2:
        level = 'DEBUG'
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        format='<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
    )
    log.debug(
        'Logging configured at {} (effective_verbosity={}, colorize={})',
        level,
        effective_verbosity,
        colorize,
    )


def _count_verbose(argv: list[str]) -> int:
    count = 0
    for item in argv:
        if item == '--verbose':
            count += 1
        elif item.startswith('-') and not item.startswith('--'):
            short = item[1:]
            if short and set(short) <= {'v'}:
                count += len(short)
    return count
