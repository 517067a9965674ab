"""
Domain beinhaltet die Entity StudentRecord

Dieses Modul enthält nur die Fachlogik.
Es enthält keine UI- oder Datei-Logik.

- Texte werden gekürzt, nicht abgelehnt (Grenze in UTF-8-Bytes).
- gpa und attendance_percent haben einfache Genauigkeit (float32).
- Zahlen außerhalb des Bereichs führen zu einem DataValidationError.
- Ein ungültiger Datensatz kann so nie in die Sammlung gelangen.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List

from .errors import DataValidationError
from .validation import (
    AGE_MAX,
    AGE_MIN,
    ATTENDANCE_MAX,
    ATTENDANCE_MIN,
    GPA_MAX,
    GPA_MIN,
    YEAR_MAX,
    YEAR_MIN,
    is_valid_admission_number,
    is_valid_age,
    is_valid_attendance,
    is_valid_gpa,
    is_valid_year_of_study,
)

# Grenzen in Bytes (UTF-8), bei ASCII also Zeichen.
NAME_MAX_LEN = 49
COURSE_MAX_LEN = 29
SUBJECTS_MAX_LEN = 99

TEXT_ENCODING = "utf-8"

_FLOAT32 = struct.Struct("<f")


def _truncate(text: str, max_bytes: int) -> str:
    """
    Entfernt NUL-Zeichen und kürzt auf max_bytes Bytes (UTF-8).
    Ein Mehrbyte-Zeichen wird nie zerteilt.
    """
    raw = str(text).replace("\x00", "").encode(TEXT_ENCODING)
    return raw[:max_bytes].decode(TEXT_ENCODING, errors="ignore")


def to_float32(value: float) -> float:
    """Rundet auf einfache Genauigkeit, wie sie in der Datei steht."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


@dataclass(slots=True)
class StudentRecord:
    """
    Ein Studierenden-Datensatz.
    Die Admission Number ist der eindeutige Schlüssel in der Sammlung.
    """
    admission_no: str
    name: str
    age: int
    course: str
    subjects: str
    gpa: float
    attendance_percent: float
    year_of_study: int

    def __post_init__(self) -> None:
        """Kürzt Texte und prüft Grundregeln nach dem Erzeugen."""
        if not is_valid_admission_number(self.admission_no):
            raise DataValidationError(
                f"Invalid Admission Number {self.admission_no!r}. Must be AP followed by 11 digits."
            )

        self.name = _truncate(self.name, NAME_MAX_LEN)
        self.course = _truncate(self.course, COURSE_MAX_LEN)
        self.subjects = _truncate(self.subjects, SUBJECTS_MAX_LEN)

        if not is_valid_age(self.age):
            raise DataValidationError(f"age muss im Bereich {AGE_MIN}..{AGE_MAX} liegen, ist aber {self.age}.")
        if not is_valid_gpa(self.gpa):
            raise DataValidationError(f"gpa muss im Bereich {GPA_MIN}..{GPA_MAX} liegen, ist aber {self.gpa}.")
        if not is_valid_attendance(self.attendance_percent):
            raise DataValidationError(
                f"attendance_percent muss im Bereich {ATTENDANCE_MIN}..{ATTENDANCE_MAX} liegen, "
                f"ist aber {self.attendance_percent}."
            )
        if not is_valid_year_of_study(self.year_of_study):
            raise DataValidationError(
                f"year_of_study muss im Bereich {YEAR_MIN}..{YEAR_MAX} liegen, ist aber {self.year_of_study}."
            )

        # Speicher und Datei halten denselben Wert.
        self.gpa = to_float32(self.gpa)
        self.attendance_percent = to_float32(self.attendance_percent)

    def subject_list(self) -> List[str]:
        """Fächer als Liste. Leere Einträge werden ignoriert."""
        return [s.strip() for s in self.subjects.split(",") if s.strip()]
