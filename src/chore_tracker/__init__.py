"""Household chores tracker: recurring tasks, due-state colors, hosted record store."""

__version__ = "0.1.0"
