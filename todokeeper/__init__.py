"""A command-line to-do list backed by SQLite, with an arrow-key selection menu."""

__version__ = "0.1.0"