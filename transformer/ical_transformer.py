"""iCalendar transformer for tuition sessions."""

import hashlib
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from icalendar import Calendar, Event

from roster.models import Session, Student
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that places one week of sessions in an iCalendar file.

    Each session becomes a single event on its weekday within the chosen
    week. Times are written as floating local times.
    """

    UID_DOMAIN = "tutorbook.local"

    def __init__(self) -> None:
        self._calendar: Optional[Calendar] = None

    @staticmethod
    def week_start(day: date) -> date:
        """Monday of the week containing ``day``."""
        return day - timedelta(days=day.weekday())

    def _generate_uid(self, student: Student, session: Session, monday: date) -> str:
        """Generate a unique identifier for a session occurrence.

        Args:
            student: Owner of the session.
            session: The tuition session.
            monday: First day of the exported week.

        Returns:
            Unique identifier string, stable across exports of the same week.
        """
        unique_string = f"{student.name}-{session.day}-{session.time}-{monday}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@" + self.UID_DOMAIN

    @staticmethod
    def _at(day: date, minutes: int) -> datetime:
        return datetime.combine(day, datetime.min.time()) + timedelta(minutes=minutes)

    def transform(self, students: Iterable[Student], week_of: date) -> Calendar:
        """Transform the students' sessions into iCalendar format.

        Args:
            students: Students whose sessions are exported.
            week_of: Any date in the week to export.

        Returns:
            iCalendar Calendar object with one event per session.
        """
        monday = self.week_start(week_of)

        self._calendar = Calendar()
        self._calendar.add("prodid", "-//TutorBook//tuition sessions//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", "Tuition sessions")

        for student in students:
            for session in student.sorted_sessions():
                session_date = monday + timedelta(days=session.day.weekday)

                ical_event = Event()
                ical_event.add("uid", self._generate_uid(student, session, monday))
                ical_event.add("dtstart", self._at(session_date, session.time.start))
                ical_event.add("dtend", self._at(session_date, session.time.end))
                ical_event.add("dtstamp", datetime.now(timezone.utc))
                ical_event.add("summary", f"Tuition: {student.name}")
                ical_event.add("location", student.address)

                if student.remark:
                    ical_event.add("description", student.remark)

                self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
