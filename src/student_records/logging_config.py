"""
Logging-Konfiguration

Ein Logger pro Kanal (store, persistence, controller) unter "student_records".
Die Ausgabe geht in eine Datei, nicht in die Konsole.
"""

from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER_NAME = "student_records"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
CHANNELS = ("store", "persistence", "controller")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Richtet das Logging einmalig beim Start ein.
    - Ohne log_file wird auf stderr geschrieben.
    - Ein erneuter Aufruf ersetzt den Handler.
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    log_level = getattr(logging, level.upper(), logging.INFO)
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.handlers = [handler]
    app_logger.setLevel(log_level)

    for channel in CHANNELS:
        get_logger(channel).setLevel(log_level)

    return app_logger


def get_logger(channel: str) -> logging.Logger:
    """Liefert den Logger für einen Kanal, z.B. get_logger("store")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{channel}")
