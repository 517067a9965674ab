"""
Persistence layer (Binärdatei)

Die Datendatei ist eine Folge von Blöcken fester Größe.
Kein Header, keine Längenangabe, keine Prüfsumme.
Die Anzahl der Datensätze ergibt sich aus Dateigröße / Blockgröße.

- StudentRecordCodec: Mapping zwischen StudentRecord und Block
- BinaryFileStorage: Dateizugriff (lesen / schreiben / löschen)
- StudentRecordRepository: Schnittstelle (load / save / delete)
- BinaryStudentRecordRepository: Datei-Repository

Blocklayout (little-endian, 212 Bytes):

    char[14]  admission_no
    char[50]  name
    int32     age
    char[30]  course
    char[100] subjects
    2 Bytes   Padding
    float32   gpa
    float32   attendance_percent
    int32     year_of_study

Das entspricht dem Speicherlayout der alten C-Datendateien auf x86.
"""

from __future__ import annotations

import contextlib
import os
import stat
import struct
import tempfile
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Sequence

from .domain import TEXT_ENCODING, StudentRecord
from .errors import DataValidationError
from .logging_config import get_logger

logger = get_logger("persistence")

ENCODING = TEXT_ENCODING

ADMISSION_FIELD_SIZE = 14
NAME_FIELD_SIZE = 50
COURSE_FIELD_SIZE = 30
SUBJECTS_FIELD_SIZE = 100

RECORD_FORMAT = (
    f"<{ADMISSION_FIELD_SIZE}s{NAME_FIELD_SIZE}si"
    f"{COURSE_FIELD_SIZE}s{SUBJECTS_FIELD_SIZE}s2xffi"
)


class StudentRecordCodec:
    """
    Wandelt StudentRecord <-> Block.
    - Texte: UTF-8, mit NUL aufgefüllt, mindestens ein abschließendes NUL.
    - Zu lange Texte werden an einer Zeichengrenze abgeschnitten.
    - Zahlen: int32 und float32.
    """

    _struct = struct.Struct(RECORD_FORMAT)
    record_size: int = _struct.size

    def encode(self, record: StudentRecord) -> bytes:
        """Baut einen Block aus einem Datensatz."""
        return self._struct.pack(
            self._encode_text(record.admission_no, ADMISSION_FIELD_SIZE),
            self._encode_text(record.name, NAME_FIELD_SIZE),
            record.age,
            self._encode_text(record.course, COURSE_FIELD_SIZE),
            self._encode_text(record.subjects, SUBJECTS_FIELD_SIZE),
            record.gpa,
            record.attendance_percent,
            record.year_of_study,
        )

    def encode_many(self, records: Sequence[StudentRecord]) -> bytes:
        """Alle Blöcke direkt hintereinander."""
        return b"".join(self.encode(r) for r in records)

    def decode(self, block: bytes) -> StudentRecord:
        """
        Baut einen Datensatz aus einem Block.
        Fehlerbehandlung:
        - DataValidationError, wenn der Block falsche Größe hat oder ungültige Werte enthält
        """
        if len(block) != self.record_size:
            raise DataValidationError(
                f"Block muss {self.record_size} Bytes lang sein, ist aber {len(block)}."
            )

        admission, name, age, course, subjects, gpa, attendance, year = self._struct.unpack(block)
        return StudentRecord(
            admission_no=self._decode_text(admission),
            name=self._decode_text(name),
            age=age,
            course=self._decode_text(course),
            subjects=self._decode_text(subjects),
            gpa=gpa,
            attendance_percent=attendance,
            year_of_study=year,
        )

    def iter_blocks(self, data: bytes) -> Iterator[bytes]:
        """Liefert alle ganzen Blöcke. Ein unvollständiger Rest wird übersprungen."""
        size = self.record_size
        for offset in range(0, len(data) - size + 1, size):
            yield data[offset:offset + size]

    def _encode_text(self, text: str, field_size: int) -> bytes:
        """
        Kodiert Text für ein Feld fester Breite.
        Platz für das abschließende NUL bleibt immer frei.
        """
        raw = text.encode(ENCODING)
        limit = field_size - 1
        if len(raw) > limit:
            # Abschneiden ohne ein Mehrbyte-Zeichen zu zerteilen.
            raw = raw[:limit].decode(ENCODING, errors="ignore").encode(ENCODING)
        return raw

    def _decode_text(self, raw: bytes) -> str:
        """Text bis zum ersten NUL."""
        return raw.split(b"\x00", 1)[0].decode(ENCODING, errors="replace")


class BinaryFileStorage:
    """
    Klasse für Dateihandling beim Laden, Speichern und Löschen.
    - Nur lesen/schreiben/löschen, keine Kodierung.
    - Schreiben ersetzt die Datei erst, wenn alles geschrieben ist.
    """

    def read_bytes(self, path: str, max_bytes: Optional[int] = None) -> bytes:
        """
        Liest eine Datei binär.
        Fehlerbehandlung:
        - FileNotFoundError, wenn Datei fehlt
        - OSError bei sonstigen Leseproblemen
        """
        with open(path, "rb") as f:
            if max_bytes is None:
                return f.read()
            return f.read(max_bytes)

    def write_bytes(self, path: str, content: bytes) -> None:
        """
        Schreibt den Inhalt in eine temporäre Datei im Zielordner
        und ersetzt danach die alte Datei.
        Bei einem Fehler bleibt die alte Datei unverändert.
        Die Dateirechte der alten Datei bleiben erhalten.
        """
        directory = os.path.dirname(os.path.abspath(path))
        mode = self._target_mode(path)
        fd, tmp_path = tempfile.mkstemp(prefix=".records-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise

    def _target_mode(self, path: str) -> int:
        """
        Rechte für die neue Datei.
        - Datei existiert: ihre bisherigen Rechte
        - sonst: 0o666 abzüglich umask, wie bei open()
        """
        try:
            return stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def delete(self, path: str) -> bool:
        """
        Löscht die Datei.
        - True: Datei wurde gelöscht
        - False: Datei gab es nicht
        - OSError, wenn sie existiert aber nicht gelöscht werden kann
        """
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        return True


@dataclass(slots=True)
class LoadedRecords:
    """
    Ergebnis eines Ladevorgangs.
    - skipped: Blöcke mit ungültigen Werten
    - trailing_bytes: unvollständiger Block am Dateiende
    - more_available: Datei enthält mehr Blöcke als geladen werden durften
    """
    records: List[StudentRecord] = field(default_factory=list)
    skipped: int = 0
    trailing_bytes: int = 0
    more_available: bool = False


class StudentRecordRepository(Protocol):
    """
    Schnittstelle für Persistenz.
    """
    location: str

    def load(self, max_records: int) -> LoadedRecords:
        """Lädt höchstens max_records Datensätze."""
        ...

    def save(self, records: Sequence[StudentRecord]) -> None:
        """Überschreibt die gespeicherten Datensätze."""
        ...

    def delete(self) -> bool:
        """Löscht die gespeicherten Datensätze."""
        ...


class BinaryStudentRecordRepository:
    """
    Repository für eine Binärdatei.
    - BinaryFileStorage für Datei-Zugriff
    - StudentRecordCodec für Mapping
    """

    def __init__(
        self,
        path: str,
        storage: Optional[BinaryFileStorage] = None,
        codec: Optional[StudentRecordCodec] = None
    ) -> None:
        self.location = str(path)
        self._storage = storage or BinaryFileStorage()
        self._codec = codec or StudentRecordCodec()

    def load(self, max_records: int) -> LoadedRecords:
        """
        Lädt die Datei und baut die Domain-Objekte.
        - Ein Byte mehr als erlaubt wird gelesen, um Überlauf zu erkennen.
        - Ungültige Blöcke werden übersprungen und gezählt.
        """
        limit = max_records * self._codec.record_size
        raw = self._storage.read_bytes(self.location, limit + 1)

        result = LoadedRecords(more_available=len(raw) > limit)
        raw = raw[:limit]
        result.trailing_bytes = len(raw) % self._codec.record_size

        for index, block in enumerate(self._codec.iter_blocks(raw)):
            try:
                result.records.append(self._codec.decode(block))
            except DataValidationError as e:
                result.skipped += 1
                logger.warning("Block %d in %s übersprungen: %s", index, self.location, e)

        if result.trailing_bytes:
            logger.warning(
                "Unvollständiger Block am Ende von %s ignoriert (%d Bytes).",
                self.location, result.trailing_bytes,
            )
        if result.more_available:
            logger.warning("%s enthält mehr als %d Datensätze, Rest ignoriert.", self.location, max_records)

        return result

    def save(self, records: Sequence[StudentRecord]) -> None:
        """
        Serialisiert und schreibt in die Datei.
        """
        self._storage.write_bytes(self.location, self._codec.encode_many(records))

    def delete(self) -> bool:
        """Löscht die Datei. Eine fehlende Datei ist kein Fehler."""
        return self._storage.delete(self.location)
