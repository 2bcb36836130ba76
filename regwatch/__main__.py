"""Entry point for `python -m regwatch`.

Usage:
    python -m regwatch run
    python -m regwatch check "Example AG"
"""

from __future__ import annotations

from regwatch.cli import cli

cli()
