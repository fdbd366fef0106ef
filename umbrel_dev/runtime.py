"""Runtime helpers for constructing vagrant commands and in-VM requests."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path

from .config import GUEST_PROJECT_DIR
from .util import CmdResult, run_cmd, shell_join


def vagrant_cmd(*args: str) -> list[str]:
    return ['vagrant', *args]


@dataclass(frozen=True)
class GuestCommand:
    """
    A single command to run inside the VM.

    ``argv`` is shell-quoted when rendered so that forwarded user arguments
    stay literal. Requests built with :meth:`shell` carry ``script`` instead,
    which is passed through untouched for the guest shell to interpret.
    """

    argv: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)
    script: str | None = None

    @classmethod
    def of(cls, *argv: str, **env: str) -> 'GuestCommand':
        return cls(argv=tuple(argv), env=dict(env))

    @classmethod
    def shell(cls, script: str) -> 'GuestCommand':
        return cls(script=script)

    def render(self) -> str:
        if self.script is not None:
            return self.script
        if not self.argv:
            raise ValueError('GuestCommand requires argv or a shell script')
        assigns = [
            f'{key}={shlex.quote(value)}' for key, value in self.env.items()
        ]
        return ' '.join([*assigns, shell_join(self.argv)])


def guest_script(
    *commands: GuestCommand, workdir: str | None = GUEST_PROJECT_DIR
) -> str:
    """Chain requests with ``&&``, first changing into ``workdir`` if given."""
    parts = [c.render() for c in commands]
    if workdir is not None:
        parts.insert(0, f'cd {shlex.quote(workdir)}')
    return ' && '.join(parts)


def vm_ssh_cmd(
    *commands: GuestCommand, workdir: str | None = GUEST_PROJECT_DIR
) -> list[str]:
    return vagrant_cmd('ssh', '-c', guest_script(*commands, workdir=workdir))


def run_in_vm(
    root: Path,
    *commands: GuestCommand,
    check: bool = True,
    capture: bool = False,
    workdir: str | None = GUEST_PROJECT_DIR,
) -> CmdResult:
    return run_cmd(
        vm_ssh_cmd(*commands, workdir=workdir),
        check=check,
        capture=capture,
        cwd=root,
    )
