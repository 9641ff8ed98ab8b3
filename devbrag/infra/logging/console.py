import logging
from typing import Any, Mapping

from devbrag.core.ports.logger import Logger

_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class _ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context: Mapping[str, Any] | None = getattr(record, 'context', None)
        if not context:
            return base
        pairs = ' '.join(f'{key}={value!r}' for key, value in sorted(context.items()))
        return f'{base} | {pairs}'


class ConsoleLogger(Logger):
    def __init__(self, name: str, level: str | int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(_resolve_level(level))
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(_ContextFormatter(_FORMAT))
            self._logger.addHandler(handler)
        self._logger.propagate = False

    def debug(self, message: str, **context: Any) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, context)

    def exception(self, message: str, **context: Any) -> None:
        self._logger.exception(message, extra={'context': context})

    def _log(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        self._logger.log(level, message, extra={'context': context})


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f'Unknown log level {level}')
    return resolved
