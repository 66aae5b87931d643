import logging
import sys

# Third-party loggers that announce every HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


class Log:
    """Process-wide logger for the checker, writing to stdout."""

    _logger: logging.Logger = logging.getLogger("subtitle_checker")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level, attach the stdout handler once, quiet HTTP client noise."""
        level = log_level.upper()
        cls._logger.setLevel(level)
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)
        third_party_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(third_party_level)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR level with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
