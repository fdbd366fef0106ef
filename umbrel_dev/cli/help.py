"""CLI help text rendering."""

from __future__ import annotations

import scriptconfig as scfg

from .. import __version__
from ._common import _BaseCommand

# Commands whose usage carries arguments beyond the bare name.
_USAGE = {
    'rebuild': 'rebuild <container>',
    'app': 'app <command> [options]',
    'run': 'run <command>',
}


class HelpCLI(_BaseCommand):
    """Show this help message."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        cls.cli(argv=argv, data=kwargs)
        print(render_help())
        return 1


def _iter_modal_members(
    modal_cls: type[scfg.ModalCLI],
) -> list[tuple[str, type]]:
    members: list[tuple[str, type]] = []
    for name, val in modal_cls.__dict__.items():
        if name.startswith('_'):
            continue
        if not isinstance(val, type):
            continue
        if issubclass(val, scfg.ModalCLI) or issubclass(val, scfg.DataConfig):
            members.append((name, val))
    return members


def _short_help_line(cls: type) -> str:
    doc = (getattr(cls, '__doc__', '') or '').strip()
    if not doc:
        return ''
    return doc.splitlines()[0].strip()


def render_help(modal_cls: type[scfg.ModalCLI] | None = None) -> str:
    if modal_cls is None:
        from .main import UmbrelDevModalCLI

        modal_cls = UmbrelDevModalCLI
    rows = [
        (_USAGE.get(name, name), _short_help_line(subcls).rstrip('.'))
        for name, subcls in _iter_modal_members(modal_cls)
    ]
    width = max(len(usage) for usage, _ in rows) + 4
    lines = [
        f'umbrel-dev {__version__}',
        '',
        'Automatically initialize and manage an Umbrel development environment.',
        '',
        'Usage: umbrel-dev <command> [options]',
        '',
        'Commands:',
    ]
    for usage, text in rows:
        lines.append(f'    {usage:<{width}}{text}')
    return '\n'.join(lines)
