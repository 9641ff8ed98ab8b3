from tests.fakes.activity_source import FakeActivitySource
from tests.fakes.clock import FakeClock
from tests.fakes.github import (
    FakeGitHubClient,
    repo_item,
    search_commit_item,
    search_pr_item,
)
from tests.fakes.logger import FakeLogger
from tests.fakes.summarizer import FakeSummarizer

__all__ = [
    "FakeActivitySource",
    "FakeClock",
    "FakeGitHubClient",
    "FakeLogger",
    "FakeSummarizer",
    "repo_item",
    "search_commit_item",
    "search_pr_item",
]
