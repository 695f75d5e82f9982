"""Shared utilities: byte units, formatting and logging setup."""
