from devbrag.infra.github.activity_source import GitHubActivitySource
from devbrag.infra.github.client import GitHubClient

__all__ = ["GitHubClient", "GitHubActivitySource"]
