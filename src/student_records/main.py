"""
Entry point für die Datensatz-Verwaltung.
Dieses Modul startet die Anwendung.
"""

from __future__ import annotations

import sys
from typing import Optional

from .config import AppConfig
from .controller import RecordController
from .logging_config import setup_logging
from .persistence import BinaryStudentRecordRepository
from .store import RecordStore
from .view import ConsoleView


def main(config: Optional[AppConfig] = None) -> None:
    """
    Startpunkt der Anwendung.
    Ablauf:
    - Konfiguration und Logging
    - Komponenten erstellen
    - Controller starten
    """
    config = config or AppConfig()

    try:
        setup_logging(config.log_level, config.log_file)

        # Bausteine der App erstellen.
        repo = BinaryStudentRecordRepository(config.data_file)
        store = RecordStore(repo, capacity=config.capacity)
        view = ConsoleView()
        controller = RecordController(store, view)

        # App starten.
        controller.starte_app()

    except KeyboardInterrupt:
        # Sauberer Abbruch per Strg+C.
        print("\nAnwendung beendet.")
        sys.exit(0)

    except Exception as e:
        # Unerwarteter Fehler.
        print(f"\nFEHLER: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
