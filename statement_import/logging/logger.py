import logging
import sys


class Log:
    """Centralized import-pipeline logging.

    Keyword context passed to any method is rendered after the message as
    ``key=value`` pairs so that per-document fields (file name, institution,
    counts) survive the plain-text formatter.
    """

    _logger: logging.Logger = logging.getLogger("statement_import")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and a stderr handler.

        Standard output is left to the review the command prints.
        """
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(cls._render(message, context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(cls._render(message, context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(cls._render(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(cls._render(message, context))

    @staticmethod
    def _render(message: str, context: dict[str, object]) -> str:
        if not context:
            return message
        fields = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{message} [{fields}]"
