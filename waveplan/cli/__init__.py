"""Command line interface."""

from waveplan.cli.main import app

__all__ = ["app"]
