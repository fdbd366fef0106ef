from __future__ import annotations

from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..environment import require_dev_root
from ..errors import MissingArgumentError

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all commands."""

    verbose = scfg.Value(
        0,
        short_alias=['v'],
        isflag='counter',
        help='Increase verbosity (-v, -vv).',
    )


def _dev_root() -> Path:
    return require_dev_root(Path.cwd())


def _require_arg(value: str | None, message: str) -> str:
    value = '' if value is None else str(value)
    if not value:
        raise MissingArgumentError(message)
    return value
