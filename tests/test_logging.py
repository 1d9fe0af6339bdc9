import io
import logging
import pytest
import litebind

@pytest.fixture
def log_stream():
    stream = io.StringIO()
    logger = litebind.setup_logging(logging.DEBUG, stream)
    yield stream
    for handler in logger.handlers[:]:
        if getattr(handler, "_litebind_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)

def test_open_and_close_are_logged(log_stream, db_path):
    conn = litebind.open(db_path, litebind.OPEN_READWRITE | litebind.OPEN_CREATE)
    conn.close()
    out = log_stream.getvalue()
    assert "opened" in out
    assert "closed" in out
    assert " - DEBUG - " in out

def test_engine_errors_are_logged(log_stream, mem):
    with pytest.raises(litebind.EngineError):
        mem.execute("SELEC 1")
    assert "engine error: [1]" in log_stream.getvalue()

def test_setup_logging_replaces_its_handler():
    logger = litebind.setup_logging(logging.INFO, io.StringIO())
    litebind.setup_logging(logging.INFO, io.StringIO())
    ours = [h for h in logger.handlers if getattr(h, "_litebind_handler", False)]
    assert len(ours) == 1
    assert logger.level == logging.INFO
    logger.removeHandler(ours[0])
    logger.setLevel(logging.NOTSET)

def test_silent_by_default():
    handlers = logging.getLogger("litebind").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
