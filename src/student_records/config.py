"""
Konfiguration der Anwendung

Feste Werte an einer Stelle gebündelt.
Es gibt keine Umgebungsvariablen und keine Kommandozeilen-Flags.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CAPACITY = 100
DEFAULT_DATA_FILE = "student_records.dat"
DEFAULT_LOG_FILE = "student_records.log"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    Einstellungen für einen Programmlauf.
    - data_file: Datendatei, relativ zum Arbeitsverzeichnis
    - capacity: maximale Anzahl an Datensätzen
    - log_file: Logdatei für alle Kanäle
    """
    data_file: str = DEFAULT_DATA_FILE
    capacity: int = DEFAULT_CAPACITY
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"capacity muss > 0 sein, ist aber {self.capacity}.")
