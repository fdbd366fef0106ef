"""Shared utility helpers for subprocess execution and command formatting."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

log = logger


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str


class CmdError(RuntimeError):
    def __init__(self, cmd: Sequence[str] | str, result: CmdResult):
        self.cmd = cmd
        self.result = result
        super().__init__(
            f'Command failed (code={result.code}): {cmd}\n{result.stderr}'.strip()
        )


def shell_join(cmd: Sequence[str]) -> str:
    return ' '.join(shlex.quote(c) for c in cmd)


def run_cmd(
    cmd: Sequence[str],
    *,
    check: bool = True,
    capture: bool = True,
    text: bool = True,
    cwd: Optional[Path | str] = None,
    env: Optional[dict[str, str]] = None,
) -> CmdResult:
    cmd = list(cmd)
    if cwd is not None:
        log.opt(depth=1).debug('RUN (cwd={}): {}', cwd, shell_join(cmd))
    else:
        log.opt(depth=1).debug('RUN: {}', shell_join(cmd))
    p = subprocess.run(
        cmd,
        capture_output=capture,
        text=text,
        cwd=None if cwd is None else str(cwd),
        env=env,
    )
    res = CmdResult(p.returncode, p.stdout or '', p.stderr or '')
    if check and p.returncode != 0:
        log.opt(depth=1).error(
            'Command failed code={} cmd={} stderr={} stdout={}',
            p.returncode,
            shell_join(cmd),
            res.stderr.strip(),
            res.stdout.strip(),
        )
        raise CmdError(cmd, res)
    if p.returncode == 0:
        log.opt(depth=1).debug('Command ok code=0 cmd={}', shell_join(cmd))
    return res


def exit_status(code: int) -> int:
    """Map a subprocess return code to the status a shell would report."""
    if code < 0:
        # Killed by signal -code.
        return 128 - code
    return code


def dir_is_empty(path: Path) -> bool:
    """True when ``path`` has no entries at all, hidden ones included."""
    return next(iter(path.iterdir()), None) is None
