"""
UI layer für die Console

Diese View zeigt die Datensätze in der Konsole.
- Text formatieren und ausgeben
- Tabelle und Detailansicht bauen
- Eingaben und Menü anzeigen

Farben (ANSI) werden nur genutzt, wenn die Ausgabe ein Terminal ist.
Eingaben laufen über input_func (Standard: input).
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence

from .domain import StudentRecord

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"
BG_BLUE = "\033[44m"
BG_CYAN = "\033[46m"

CLEAR_SCREEN = "\033[H\033[J"

MENU_OPTIONS = [
    (1, "Add New Student Record"),
    (2, "View All Student Records"),
    (3, "Search Record by Admission Number"),
    (4, "Save Records to File"),
    (5, "DELETE ALL RECORDS (Start Fresh)"),
    (6, "Exit Application (Unsaved data will be lost!)"),
]


class ConsoleView:
    """
    View für die Konsole.

    Die Breite ist fest auf 80 Zeichen, wie bei der alten Oberfläche.
    """

    def __init__(
        self,
        width: int = 80,
        use_color: Optional[bool] = None,
        input_func: Optional[Callable[[str], str]] = None
    ) -> None:
        """
        Erstellt die View.
        - use_color None: Farben nur bei einem Terminal
        - input_func: liefert eine Zeile ohne Zeilenumbruch (Standard: input)
        """
        if use_color is None:
            use_color = sys.stdout.isatty()
        self._width = width
        self._use_color = use_color
        self._input = input_func or input

    def prompt(self, frage: str) -> str:
        """
        Fragt den Nutzer nach Eingabe.
        EOFError wird an den Aufrufer weitergegeben.
        """
        return self._input(self._style(f"  {frage}", YELLOW))

    def show_message(self, text: str) -> None:
        """
        Gibt eine Nachricht aus.
        """
        print(text)

    def show_success(self, text: str) -> None:
        print(self._style(f"\n  [SUCCESS] {text}", GREEN, BOLD))

    def show_error(self, text: str) -> None:
        print(self._style(f"\n  [ERROR] {text}", RED, BOLD))

    def show_warning(self, text: str) -> None:
        print(self._style(f"\n  {text}", YELLOW, BOLD))

    def show_info(self, text: str) -> None:
        print(self._style(f"\n  [INFO] {text}", YELLOW, BOLD))

    def render_header(self, title: str) -> None:
        """Zeigt eine Überschrift, zentriert in einem Balken."""
        print()
        print(self._style(f" {title.center(self._width - 2)} ", WHITE, BG_BLUE, BOLD))
        print()

    def render_menue(self) -> None:
        """Zeigt das Hauptmenü."""
        self.render_header("STUDENT RECORD MANAGEMENT SYSTEM")
        print(self._style("  Welcome! Select an option from the menu below:\n", WHITE, BOLD))
        for number, description in MENU_OPTIONS:
            print(self._style(f"  [{number}]", CYAN, BOLD) + f" {description}")
        self._separator()

    def render_records(self, records: Sequence[StudentRecord]) -> None:
        """
        Zeigt alle Datensätze als Tabelle.
        Zahlen sind rechtsbündig, damit Dezimalpunkte untereinander stehen.
        """
        self._separator()
        header = self._table_row("ADMN NO.", "NAME", "AGE", "COURSE", "YR", "GPA", "ATTENDANCE")
        print(self._style(header, WHITE, BG_CYAN, BOLD))
        self._separator()

        for s in records:
            print(
                f"| {s.admission_no:<13} | {s.name:<20} | {s.age:>4d} | {s.course:<20} | "
                f"{s.year_of_study:>4d} | {s.gpa:>6.2f} | {s.attendance_percent:>10.2f}% |"
            )

        self._separator()
        print(self._style(f"\n  Total Records: {len(records)}", WHITE, BOLD))

    def render_record(self, record: StudentRecord) -> None:
        """Zeigt einen Datensatz im Detail."""
        print(self._style("\n  [MATCH FOUND]", GREEN, BOLD))
        self._separator()

        subjects = ", ".join(record.subject_list()) or "-"
        rows = [
            ("Admission No:", self._style(record.admission_no, CYAN)),
            ("Name:", record.name),
            ("Age:", str(record.age)),
            ("Course/Major:", record.course),
            ("Year of Study:", str(record.year_of_study)),
            ("Subjects:", subjects),
            ("GPA:", self._style(f"{record.gpa:.2f} / 10.00", YELLOW)),
            ("Attendance:", self._style(f"{record.attendance_percent:.2f}%", MAGENTA)),
        ]
        for label, value in rows:
            print(self._style(f"  {label:<14}", WHITE, BOLD) + f" {value}")

        self._separator()

    def pause(self) -> None:
        """
        Wartet auf ENTER und leert danach den Bildschirm.
        So bleibt Zeit, die Ausgabe zu lesen.
        """
        try:
            self._input(self._style("\nPress ENTER to continue...", YELLOW))
        except EOFError:
            # Keine Eingabe mehr, das Menü beendet sich danach selbst.
            return
        self.clear_screen()

    def clear_screen(self) -> None:
        if self._use_color:
            print(CLEAR_SCREEN, end="")

    def _separator(self) -> None:
        print(self._style("-" * self._width, CYAN))

    def _table_row(self, *cells: str) -> str:
        """Kopfzeile der Tabelle, gleiche Breiten wie die Datenzeilen."""
        widths = [13, 20, 4, 20, 4, 6, 11]
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths)) + " |"

    def _style(self, text: str, *codes: str) -> str:
        """Färbt Text ein, wenn Farben aktiv sind."""
        if not self._use_color:
            return text
        return "".join(codes) + text + RESET

