"""Package-wide logger with colored level names."""
import logging

COLOR_RESET = "\033[0m"
COLOR_RED = "\033[31m"
COLOR_GREEN = "\033[32m"
COLOR_YELLOW = "\033[33m"
COLOR_CYAN = "\033[36m"


class ColorFormatter(logging.Formatter):
    """Formatter that colors the level name according to its severity."""

    LEVEL_COLORS = {
        logging.DEBUG: COLOR_CYAN,
        logging.INFO: COLOR_GREEN,
        logging.WARNING: COLOR_YELLOW,
        logging.ERROR: COLOR_RED,
        logging.CRITICAL: COLOR_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, COLOR_RESET)
        # Work on a copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logger(name: str = "calculator_server", level: int = logging.INFO) -> logging.Logger:
    """
    Create (or return the already configured) named logger.

    :param str name: Logger name
    :param int level: Minimum level emitted

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    log.setLevel(level)

    # Avoid stacking handlers when the module is reloaded
    if not log.handlers:
        log.addHandler(_color_handler())

    return log


def _color_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(fmt="%(asctime)s %(levelname)-16s: %(message)s", datefmt="%d-%m %H:%M:%S"))
    return handler


def setup_uvicorn_loggers(level: int = logging.INFO) -> None:
    """Route uvicorn's server and access logs through the colored formatter."""
    handler = _color_handler()
    for name in ("uvicorn", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        # uvicorn.access would otherwise print twice through "uvicorn"
        uvicorn_logger.propagate = False


logger = setup_logger()
