"""Manage a local Vagrant-based Umbrel development environment."""

__version__ = '1.0.0'
