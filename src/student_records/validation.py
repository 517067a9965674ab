"""
Validierung

Reine Prüf-Funktionen ohne I/O und ohne Zustand.
- Format der Admission Number
- Wertebereiche für Alter, GPA, Anwesenheit und Studienjahr

Alle Bereiche sind inklusiv.
"""

from __future__ import annotations

ADMISSION_PREFIX = "AP"
ADMISSION_NO_LENGTH = 13
ASCII_DIGITS = "0123456789"

AGE_MIN, AGE_MAX = 16, 99
GPA_MIN, GPA_MAX = 0.0, 10.0
ATTENDANCE_MIN, ATTENDANCE_MAX = 0.0, 100.0
YEAR_MIN, YEAR_MAX = 1, 4


def is_valid_admission_number(admission_no: object) -> bool:
    """
    Prüft das Format der Admission Number.
    - Genau 13 Zeichen
    - Beginnt mit "AP"
    - Danach 11 Ziffern (nur ASCII 0-9)
    """
    if not isinstance(admission_no, str):
        return False
    if len(admission_no) != ADMISSION_NO_LENGTH:
        return False
    if not admission_no.startswith(ADMISSION_PREFIX):
        return False
    return all(ch in ASCII_DIGITS for ch in admission_no[len(ADMISSION_PREFIX):])


def is_valid_age(age: int) -> bool:
    return AGE_MIN <= age <= AGE_MAX


def is_valid_gpa(gpa: float) -> bool:
    # NaN liegt nie im Bereich.
    return GPA_MIN <= gpa <= GPA_MAX


def is_valid_attendance(attendance_percent: float) -> bool:
    return ATTENDANCE_MIN <= attendance_percent <= ATTENDANCE_MAX


def is_valid_year_of_study(year: int) -> bool:
    return YEAR_MIN <= year <= YEAR_MAX
