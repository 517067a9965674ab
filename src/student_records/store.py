"""
Application/Use-Case layer

Der RecordStore besitzt die Sammlung der Datensätze im Speicher.
Er lädt, speichert und löscht über ein Repository und bietet
Hinzufügen, Suchen und Auflisten an.

- Reihenfolge der Sammlung = Reihenfolge des Hinzufügens
- Admission Number ist eindeutig
- Die Kapazität wird nie überschritten
- Es gibt kein automatisches Speichern
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .config import DEFAULT_CAPACITY
from .domain import StudentRecord
from .errors import CapacityError, DuplicateRecordError, FileProcessingError
from .logging_config import get_logger
from .persistence import StudentRecordRepository

logger = get_logger("store")


@dataclass(slots=True)
class LoadResult:
    """
    Ergebnis von RecordStore.load().
    - warning: Hinweis für den Nutzer, kein Fehler
    - skipped: übersprungene ungültige Blöcke
    """
    count: int
    warning: Optional[str] = None
    skipped: int = 0


class RecordStore:
    """
    Besitzt die Datensätze eines Programmlaufs.
    Wird einmal erzeugt und an den Controller übergeben.
    """

    def __init__(self, repo: StudentRecordRepository, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity muss > 0 sein, ist aber {capacity}.")
        self._repo = repo
        self._capacity = capacity
        self._records: List[StudentRecord] = []
        self._unsaved_changes = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self._capacity

    @property
    def has_unsaved_changes(self) -> bool:
        """Wahr, wenn sich Speicher und Datei seit dem letzten Laden/Speichern unterscheiden können."""
        return self._unsaved_changes

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> LoadResult:
        """
        Ersetzt die Sammlung durch den Inhalt der Datei.
        - Datei fehlt -> leere Sammlung und ein Hinweis
        - Lesefehler -> leere Sammlung und ein Hinweis (nichts gelesen)
        - Unvollständiger Block am Ende wird still ignoriert
        """
        self._records = []
        self._unsaved_changes = False

        try:
            loaded = self._repo.load(self._capacity)
        except FileNotFoundError:
            logger.info("Datendatei %s nicht gefunden, starte leer.", self._repo.location)
            return LoadResult(
                count=0,
                warning=f"Database file '{self._repo.location}' not found. Starting with an empty record list.",
            )
        except OSError as e:
            logger.error("Datendatei %s konnte nicht gelesen werden: %s", self._repo.location, e)
            return LoadResult(
                count=0,
                warning=f"Could not read database file '{self._repo.location}' ({e}). "
                        f"Starting with an empty record list.",
            )

        # Doppelte Schlüssel in der Datei: erster Eintrag gewinnt.
        seen = set()
        skipped = loaded.skipped
        for record in loaded.records:
            if record.admission_no in seen:
                skipped += 1
                logger.warning("Doppelte Admission Number %s beim Laden übersprungen.", record.admission_no)
                continue
            seen.add(record.admission_no)
            self._records.append(record)

        warning = None
        if skipped:
            warning = f"{skipped} invalid record(s) in '{self._repo.location}' were skipped."

        logger.info("%d Datensätze aus %s geladen.", len(self._records), self._repo.location)
        return LoadResult(count=len(self._records), warning=warning, skipped=skipped)

    def save(self) -> int:
        """
        Überschreibt die Datei mit der aktuellen Sammlung.
        Liefert die Anzahl geschriebener Datensätze.
        Fehlerbehandlung:
        - FileProcessingError, wenn nicht geschrieben werden kann.
          Sammlung und alte Datei bleiben dann unverändert.
        """
        try:
            self._repo.save(list(self._records))
        except OSError as e:
            logger.error("Speichern nach %s fehlgeschlagen: %s", self._repo.location, e)
            raise FileProcessingError(
                f"Could not open file '{self._repo.location}' for writing. Records not saved. ({e})"
            ) from e

        self._unsaved_changes = False
        logger.info("%d Datensätze nach %s gespeichert.", len(self._records), self._repo.location)
        return len(self._records)

    def add(self, record: StudentRecord) -> int:
        """
        Hängt einen Datensatz an. Speichert nicht.
        Liefert die neue Anzahl.
        Fehlerbehandlung (in dieser Reihenfolge):
        - CapacityError, wenn die Sammlung voll ist
        - DuplicateRecordError, wenn die Admission Number schon existiert
        """
        if self.is_full:
            raise CapacityError(self._capacity)
        if self.search(record.admission_no) is not None:
            raise DuplicateRecordError(record.admission_no)

        self._records.append(record)
        self._unsaved_changes = True
        logger.info("Datensatz %s hinzugefügt (%d gesamt).", record.admission_no, len(self._records))
        return len(self._records)

    def search(self, admission_no: str) -> Optional[StudentRecord]:
        """
        Sucht linear in Einfügereihenfolge.
        Exakter Vergleich, Groß/Klein wird unterschieden.
        """
        for record in self._records:
            if record.admission_no == admission_no:
                return record
        return None

    def list_all(self) -> List[StudentRecord]:
        """Alle Datensätze in Einfügereihenfolge. Die Liste ist eine Kopie."""
        return list(self._records)

    def clear_all(self) -> bool:
        """
        Leert die Sammlung und löscht die Datei.
        Der Speicher wird immer geleert, auch wenn das Löschen scheitert.
        - True: Datei wurde gelöscht
        - False: es gab keine Datei
        Fehlerbehandlung:
        - FileProcessingError, wenn die Datei existiert aber nicht gelöscht werden kann
        """
        self._records = []

        try:
            deleted = self._repo.delete()
        except OSError as e:
            # Speicher ist leer, Datei noch da.
            self._unsaved_changes = True
            logger.error("Datendatei %s konnte nicht gelöscht werden: %s", self._repo.location, e)
            raise FileProcessingError(
                f"File '{self._repo.location}' exists but could not be deleted ({e})."
            ) from e

        self._unsaved_changes = False
        logger.info("Alle Datensätze gelöscht (Datei entfernt: %s).", deleted)
        return deleted
