"""Logic module turning user input into commands and running them on a roster."""

from .commands import Command, CommandResult
from .parser import RosterParser

__all__ = ["Command", "CommandResult", "RosterParser"]
