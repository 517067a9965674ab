"""Entry point: Verdrahtung mit Konfiguration und Logging."""

import logging

import pytest

from student_records import main as main_module
from student_records.config import AppConfig
from student_records.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def restore_app_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for h in logger.handlers:
        h.close()
    logger.handlers = handlers
    logger.setLevel(level)


def test_config_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        AppConfig(capacity=0)


def test_channel_loggers_live_under_app_logger():
    assert get_logger("store").name == "student_records.store"


def test_setup_logging_writes_to_file(tmp_path, restore_app_logger):
    log_file = tmp_path / "app.log"
    setup_logging("DEBUG", str(log_file))

    get_logger("store").info("hello")
    for h in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        h.flush()

    assert "INFO student_records.store - hello" in log_file.read_text(encoding="utf-8")


def test_main_runs_until_exit(tmp_path, monkeypatch, capsys, restore_app_logger):
    monkeypatch.setattr("builtins.input", lambda prompt="": "6")
    config = AppConfig(
        data_file=str(tmp_path / "records.dat"),
        log_file=str(tmp_path / "records.log"),
    )

    main_module.main(config)

    out = capsys.readouterr().out
    assert "not found" in out
    assert "Goodbye" in out


def test_main_exits_cleanly_on_ctrl_c(tmp_path, monkeypatch, restore_app_logger):
    def interrupt(prompt=""):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupt)
    config = AppConfig(
        data_file=str(tmp_path / "records.dat"),
        log_file=str(tmp_path / "records.log"),
    )

    with pytest.raises(SystemExit) as exc:
        main_module.main(config)

    assert exc.value.code == 0
