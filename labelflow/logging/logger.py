import logging
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager


class Log:
    """Centralized logging for the label pipeline."""

    _logger: logging.Logger = logging.getLogger("labelflow")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

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
        """Log an error together with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    @contextmanager
    def stage(cls, name: str, label: str) -> Generator[None, None, None]:
        """Log how long one engine stage took for one label, even when it fails.

        Example: ``with Log.stage("ocr", "label.png"): ...`` logs
        ``Stage ocr for label.png finished in 1.23s``.
        """
        started = time.perf_counter()
        outcome = "failed"
        try:
            yield
            outcome = "finished"
        finally:
            cls._logger.debug(
                f"Stage {name} for {label} {outcome} in {time.perf_counter() - started:.2f}s"
            )
