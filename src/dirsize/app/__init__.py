"""Command-line application layer."""

from __future__ import annotations

from .cli import cli

__all__ = ["cli"]
