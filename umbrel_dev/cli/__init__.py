"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import UmbrelDevModalCLI, main

__all__ = ['UmbrelDevModalCLI', 'main']
