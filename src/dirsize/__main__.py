"""Allow running dirsize as ``python -m dirsize``."""

from __future__ import annotations

from dirsize.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the command-line interface."""
    cli()


if __name__ == "__main__":
    main()
