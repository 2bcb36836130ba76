"""regwatch command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``regwatch`` script).
"""

from regwatch.cli.main import cli

__all__ = ["cli"]
