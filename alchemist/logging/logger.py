import logging
import sys
from typing import TextIO


class Log:
    """Process-wide logging facade for the alchemist package."""

    _logger: logging.Logger = logging.getLogger("alchemist")
    _FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single stream handler (stdout by default)."""
        cls._logger.setLevel(log_level.upper())
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(cls._FORMAT))
        cls._logger.addHandler(handler)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.DEBUG, message, **kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.INFO, message, **kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.WARNING, message, **kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._emit(logging.ERROR, message, **kwargs)

    @classmethod
    def failure(cls, message: str, exc: BaseException) -> None:
        """Record a tolerated failure with its exception type and message.

        Used for diagnostics that must not interrupt the caller, such as a
        single spreadsheet unit failing inside a translation batch.
        """
        cls._emit(
            logging.WARNING,
            f"{message}: {type(exc).__name__}: {exc}",
            error_type=type(exc).__name__,
        )

    @classmethod
    def _emit(cls, level: int, message: str, **kwargs: object) -> None:
        cls._logger.log(level, message, extra=kwargs)
