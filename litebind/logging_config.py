import logging

LOGGER_NAME = "litebind"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(filename)s - %(message)s'

def setup_logging(log_level=logging.DEBUG, stream=None):
    """
    Send litebind's log records to a stream.

    The package logs through the standard ``logging`` module under the
    ``litebind`` logger and stays silent until a handler is attached. This
    attaches a single StreamHandler (replacing one added by an earlier call)
    and sets the level.

    Args:
        log_level (int): The logging level (default: logging.DEBUG).
        stream: Destination stream (default: sys.stderr).

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        if getattr(handler, "_litebind_handler", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._litebind_handler = True
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger
