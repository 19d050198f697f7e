"""Roster module holding persons, students and their tuition sessions."""

from .models import Day, Parent, Person, Session, Student, Time
from .roster import Roster

__all__ = ["Day", "Parent", "Person", "Roster", "Session", "Student", "Time"]
