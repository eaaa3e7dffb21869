import logging

from shared.logging_config import resolve_level, setup_logging


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.INFO


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "agent.log"
    root = logging.getLogger()
    before = list(root.handlers)

    logger = setup_logging("agent", level="info", log_file=str(log_file))
    logger.warning("inventory report failed")

    added = [h for h in root.handlers if h not in before]
    for handler in added:
        handler.flush()
        root.removeHandler(handler)
        handler.close()

    assert logger.name == "agent"
    assert "[AGENT] WARNING agent - inventory report failed" in log_file.read_text()
