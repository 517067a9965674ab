"""
Fehlerklassen der Anwendung

Alle fachlichen Fehler erben von StudentRecordsError.
Der Controller fängt sie ab und zeigt sie über die View an.
"""

from __future__ import annotations


class StudentRecordsError(Exception):
    """Basisklasse für alle Fehler dieser Anwendung."""


class DataValidationError(StudentRecordsError, ValueError):
    """Ungültige Daten, z.B. falsche Admission Number oder Wert außerhalb des Bereichs."""


class DuplicateRecordError(StudentRecordsError):
    """Ein Datensatz mit derselben Admission Number existiert bereits."""

    def __init__(self, admission_no: str) -> None:
        super().__init__(f"Record with Admission Number {admission_no} already exists.")
        self.admission_no = admission_no


class CapacityError(StudentRecordsError):
    """Die Sammlung hat die maximale Anzahl an Datensätzen erreicht."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Database capacity reached ({capacity} students). Cannot add more records.")
        self.capacity = capacity


class FileProcessingError(StudentRecordsError):
    """Fehler beim Schreiben oder Löschen der Datendatei."""
