"""Gemeinsame Fixtures: temporäre Datendatei, Repository, Store, Beispiel-Datensätze, skriptgesteuerte Eingabe."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from student_records.domain import StudentRecord
from student_records.persistence import BinaryStudentRecordRepository
from student_records.store import RecordStore
from student_records.view import ConsoleView


class ScriptedInput:
    """Liefert vorgegebene Eingabezeilen; danach EOFError wie bei Strg+D."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


def make_record(n: int = 1, **overrides) -> StudentRecord:
    """Gültiger Datensatz mit Admission Number AP + n (11 Stellen)."""
    values = dict(
        admission_no=f"AP{n:011d}",
        name=f"Student {n}",
        age=20,
        course="CS",
        subjects="Math,OS",
        gpa=8.5,
        attendance_percent=92.0,
        year_of_study=2,
    )
    values.update(overrides)
    return StudentRecord(**values)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "student_records.dat"


@pytest.fixture
def repo(data_file):
    return BinaryStudentRecordRepository(str(data_file))


@pytest.fixture
def store(repo):
    return RecordStore(repo)


@pytest.fixture
def asha():
    return StudentRecord(
        admission_no="AP00000000001",
        name="Asha",
        age=20,
        course="CS",
        subjects="Math,OS",
        gpa=8.5,
        attendance_percent=92.0,
        year_of_study=2,
    )


@pytest.fixture
def scripted_view():
    """Baut eine View ohne Farben, deren Eingaben aus einer Liste kommen."""

    def _build(*lines: str):
        feed = ScriptedInput(lines)
        return ConsoleView(use_color=False, input_func=feed), feed

    return _build
