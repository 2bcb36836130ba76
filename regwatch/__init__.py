"""regwatch: change monitoring for entities in a public company registry."""

__version__ = "0.3.0"
