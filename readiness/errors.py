from __future__ import annotations


class ReadinessError(Exception):
    """Base class for errors raised by the readiness package."""


class InvalidProfileError(ReadinessError, ValueError):
    pass


class ConfigurationError(ReadinessError):
    pass


class RecordFetchError(ReadinessError):
    """The record store could not be reached or returned an error."""


class StudentNotFoundError(RecordFetchError):
    def __init__(self, student_id: str):
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class InvalidDataError(ReadinessError, ValueError):
    """Tabular input is missing a required column."""
