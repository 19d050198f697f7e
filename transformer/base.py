"""Abstract base class for session transformers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Iterable

from roster.models import Student


class BaseTransformer(ABC):
    """Abstract base class defining the interface for session transformers.

    Extend this class to export students' weekly sessions to other
    formats (e.g., iCalendar, CSV, etc.).
    """

    @abstractmethod
    def transform(self, students: Iterable[Student], week_of: date) -> Any:
        """Transform the students' sessions into the target format.

        Args:
            students: Students whose sessions are exported.
            week_of: Any date in the week the sessions are placed in.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
