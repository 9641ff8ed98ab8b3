from devbrag.infra.logging.console import ConsoleLogger
from devbrag.infra.logging.logfire import LogfireLogger, configure_logfire

__all__ = ["ConsoleLogger", "LogfireLogger", "configure_logfire"]
