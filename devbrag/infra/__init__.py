from devbrag.infra.clock import SystemClock
from devbrag.infra.github import GitHubActivitySource, GitHubClient
from devbrag.infra.logging import ConsoleLogger, LogfireLogger, configure_logfire

__all__ = [
    'GitHubClient',
    'GitHubActivitySource',
    'ConsoleLogger',
    'LogfireLogger',
    'configure_logfire',
    'SystemClock',
]
