from typing import Any

from devbrag.core.ports.logger import Logger


def _load_logfire():
    try:
        import logfire
    except ImportError as error:
        raise RuntimeError('logfire library is not installed') from error
    return logfire


def configure_logfire(api_token: str, service_name: str = 'devbrag') -> None:
    logfire = _load_logfire()
    logfire.configure(token=api_token, service_name=service_name)


class LogfireLogger(Logger):
    """Sends log records to Logfire; context keywords become span attributes."""

    def __init__(self, name: str) -> None:
        self._logfire = _load_logfire().with_tags(name)

    def debug(self, message: str, **context: Any) -> None:
        self._logfire.debug(message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._logfire.info(message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._logfire.warn(message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._logfire.error(message, **context)

    def exception(self, message: str, **context: Any) -> None:
        self._logfire.exception(message, **context)
