"""
Controller layer

Der RecordController steuert die App. Er verbindet RecordStore und View.

Aufgaben:
- Datensätze beim Start laden
- Menü anzeigen und Eingaben verarbeiten
- Eingaben prüfen und bei Zahlen so lange nachfragen, bis der Wert passt
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .domain import StudentRecord
from .errors import StudentRecordsError, FileProcessingError
from .logging_config import get_logger
from .store import RecordStore
from .validation import (
    is_valid_admission_number,
    is_valid_age,
    is_valid_attendance,
    is_valid_gpa,
    is_valid_year_of_study,
)
from .view import ConsoleView

logger = get_logger("controller")

T = TypeVar("T")

CONFIRM_DELETE = "YES"


class RecordController:
    """
    Hauptcontroller für die Datensatz-Verwaltung.

    Aufgaben:
    - Menü-Schleife
    - Aufrufe an Store und View
    - Speichern nur auf Wunsch des Nutzers
    """

    def __init__(self, store: RecordStore, view: ConsoleView) -> None:
        """
        Erstellt den Controller.

        - store: Datensätze, Laden/Speichern
        - view: Ein-/Ausgabe
        """
        self._store = store
        self._view = view

    def starte_app(self) -> None:
        """
        Startet die Anwendung.

        - Daten laden
        - Menü-Schleife bis "Exit" oder Ende der Eingabe
        """
        result = self._store.load()
        if result.warning:
            self._view.show_warning(result.warning)
        if result.count:
            self._view.show_success(f"Successfully loaded {result.count} records from the database.")

        while True:
            self._view.render_menue()
            try:
                choice = self._view.prompt("Enter your choice: ").strip()
            except EOFError:
                self._beenden()
                break

            self._view.clear_screen()
            if choice == "1":
                self.add_record()
            elif choice == "2":
                self.view_records()
            elif choice == "3":
                self.search_record()
            elif choice == "4":
                self.save_records()
                self._view.pause()
            elif choice == "5":
                self.delete_all_records()
            elif choice == "6":
                self._beenden()
                break
            elif choice.isdigit():
                self._view.show_error("Invalid choice. Please enter a number between 1 and 6.")
                self._view.pause()
            else:
                self._view.show_error("Invalid input. Please enter a number.")
                self._view.pause()

    def add_record(self) -> None:
        """
        Legt einen neuen Datensatz an.
        - Kapazität wird zuerst geprüft
        - Admission Number: Format, dann Duplikat; bei Fehler Abbruch
        - Zahlen: Nachfragen, bis der Wert im Bereich liegt
        - Danach Frage, ob sofort gespeichert werden soll
        """
        self._view.render_header("ADD NEW STUDENT RECORD")

        if self._store.is_full:
            self._view.show_error(
                f"Database capacity reached ({self._store.capacity} students). Cannot add more records."
            )
            self._view.pause()
            return

        try:
            record = self._read_new_record()
        except EOFError:
            # Eingabe beendet, Datensatz wird verworfen.
            logger.info("Hinzufügen abgebrochen: keine Eingabe mehr.")
            self._view.pause()
            return

        if record is None:
            self._view.pause()
            return

        try:
            count = self._store.add(record)
        except StudentRecordsError as e:
            self._view.show_error(str(e))
            self._view.pause()
            return

        self._view.show_success(f"Record for {record.name} added successfully! Current total: {count}")

        try:
            antwort = self._view.prompt("Do you want to save the changes to file now? (Y/N): ").strip()
        except EOFError:
            antwort = ""
        if antwort[:1] in ("Y", "y"):
            self.save_records()

        self._view.pause()

    def view_records(self) -> None:
        """Zeigt alle Datensätze als Tabelle."""
        self._view.render_header("ALL STUDENT RECORDS")

        records = self._store.list_all()
        if not records:
            self._view.show_warning("No records found in the database. Add a new record first (Option 1).")
        else:
            self._view.render_records(records)

        self._view.pause()

    def search_record(self) -> None:
        """Sucht einen Datensatz über die Admission Number."""
        self._view.render_header("SEARCH STUDENT RECORD")

        try:
            admission_no = self._view.prompt("Enter Admission Number to search (APxxxxxxxxxxx): ").strip()
        except EOFError:
            return

        if not is_valid_admission_number(admission_no):
            self._view.show_error("Invalid Admission Number format.")
            self._view.pause()
            return

        record = self._store.search(admission_no)
        if record is None:
            self._view.show_error(f"[NOT FOUND] No student found with Admission Number: {admission_no}")
        else:
            self._view.render_record(record)

        self._view.pause()

    def save_records(self) -> bool:
        """
        Speichert alle Datensätze.
        Liefert True bei Erfolg.
        """
        try:
            count = self._store.save()
        except FileProcessingError as e:
            self._view.show_error(str(e))
            return False

        self._view.show_success(f"Successfully saved {count} records to the database.")
        return True

    def delete_all_records(self) -> None:
        """
        Löscht alle Datensätze im Speicher und die Datei.
        Nur nach Bestätigung mit genau "YES".
        """
        self._view.render_header("DELETE ALL RECORDS")
        self._view.show_warning("WARNING: This action is permanent and cannot be undone.")

        try:
            raw = self._view.prompt(
                f"Are you sure you want to delete ALL student records? (Type '{CONFIRM_DELETE}' to confirm): "
            )
        except EOFError:
            raw = ""

        # Nur das erste Wort zählt.
        parts = raw.split()
        confirmation = parts[0] if parts else ""
        if confirmation != CONFIRM_DELETE:
            self._view.show_warning("Confirmation failed. Operation cancelled.")
            self._view.pause()
            return

        try:
            deleted = self._store.clear_all()
        except FileProcessingError as e:
            self._view.show_error(f"{e} Records cleared from memory.")
        else:
            if deleted:
                self._view.show_success(
                    "All in-memory records cleared and database file successfully deleted."
                )
            else:
                self._view.show_info("Database file did not exist. Records cleared from memory.")

        self._view.pause()

    def _read_new_record(self) -> Optional[StudentRecord]:
        """
        Liest alle Felder eines neuen Datensatzes.
        - None bei ungültiger oder doppelter Admission Number
        - EOFError, wenn die Eingabe endet
        """
        admission_no = self._view.prompt("Enter Admission Number (APxxxxxxxxxxx): ").strip()
        if not is_valid_admission_number(admission_no):
            self._view.show_error("Invalid Admission Number format. Must be AP followed by 11 digits.")
            return None

        # Duplikat vor den übrigen Feldern prüfen.
        if self._store.search(admission_no) is not None:
            self._view.show_error(f"Record with Admission Number {admission_no} already exists.")
            return None

        name = self._view.prompt("Enter Student Name: ").strip()
        age = self._prompt_number("Enter Age (16-99): ", int, is_valid_age)
        course = self._view.prompt("Enter Course/Major: ").strip()
        subjects = self._view.prompt("Enter Subjects Opted (Comma separated): ").strip()
        gpa = self._prompt_number("Enter GPA (0.00-10.00): ", float, is_valid_gpa)
        attendance = self._prompt_number(
            "Enter Attendance Percentage (0.0-100.0): ", float, is_valid_attendance
        )
        year = self._prompt_number("Enter Year of Study (1-4): ", int, is_valid_year_of_study)

        return StudentRecord(
            admission_no=admission_no,
            name=name,
            age=age,
            course=course,
            subjects=subjects,
            gpa=gpa,
            attendance_percent=attendance,
            year_of_study=year,
        )

    def _prompt_number(self, frage: str, parse: Callable[[str], T], is_valid: Callable[[T], bool]) -> T:
        """
        Fragt so lange nach, bis eine Zahl im gültigen Bereich eingegeben wird.
        Nicht lesbare Eingaben zählen als ungültig.
        """
        while True:
            raw = self._view.prompt(frage).strip()
            try:
                value = parse(raw)
            except ValueError:
                continue
            if is_valid(value):
                return value

    def _beenden(self) -> None:
        """
        Beendet das Programm.
        Es wird nicht automatisch gespeichert.
        """
        if self._store.has_unsaved_changes:
            self._view.show_warning("Unsaved changes were not written to the database file.")
        self._view.show_message("\n  Thank you for using the Student Management System. Goodbye!")
