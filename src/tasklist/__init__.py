"""tasklist - a single-screen task list persisted in a local SQLite database."""

__version__ = "0.1.0"
