"""
CLI package for ParkBridge.

This package contains the command-line interface built with Rich and
Typer for exercising the MangaPark provider. The Typer application
lives in cli.app; only the runner is re-exported so the submodule name
is not shadowed.
"""
from .app import run

__all__ = ['run']
