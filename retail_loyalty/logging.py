import sys
import threading

from loguru import logger
from retail_loyalty.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class AppLogger:
    """Owns the application's single loguru sink.

    The sink is installed on first use and replaced only when
    get_config().log_level changes, so sinks added by other code (tests,
    Streamlit) survive services being constructed.
    """
    _lock = threading.Lock()
    _sink_id = None
    _level = None

    @classmethod
    def configure(cls) -> None:
        level = get_config().log_level.upper()
        with cls._lock:
            if cls._sink_id is not None and level == cls._level:
                return
            if cls._sink_id is None:
                # drop loguru's default stderr handler
                logger.remove()
                logger.configure(extra={"component": "retail_loyalty"})
            else:
                try:
                    logger.remove(cls._sink_id)
                except ValueError:
                    # someone already called logger.remove() on it
                    pass
            cls._sink_id = logger.add(sys.stderr, level=level, format=LOG_FORMAT)
            cls._level = level

    @classmethod
    def get_logger(cls, name: str = None):
        """Get the configured logger, bound to ``name`` when one is given.

        Args:
            name (str, optional): Component shown in each log line. Defaults to None.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        cls.configure()
        if name:
            return logger.bind(component=name)
        return logger


def get_logger(name: str = None):
    """Get the application logger, applying the current log level."""
    return AppLogger.get_logger(name)
