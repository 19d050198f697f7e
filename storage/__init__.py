"""Storage module for saving and loading the roster."""

from .json_storage import JsonRosterStorage

__all__ = ["JsonRosterStorage"]
